"""
Inventory Admin - admin console and API for the inventory management system
"""

__version__ = "1.0.0"

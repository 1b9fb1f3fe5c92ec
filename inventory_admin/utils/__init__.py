"""
Utility modules for the admin console
"""

"""
Admin console shell and views
"""

from .listing import UserListing, ListingLoading, ListingLoaded, ListingErrored
from .navigation import NAVIGATION_ITEMS, NavigationItem, resolve_route

__all__ = [
    "UserListing",
    "ListingLoading",
    "ListingLoaded",
    "ListingErrored",
    "NAVIGATION_ITEMS",
    "NavigationItem",
    "resolve_route",
]

"""
Admin shell navigation registry
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class NavigationItem:
    """Sidebar entry"""
    label: str
    path: str
    icon: str


@dataclass(frozen=True)
class NavLink:
    """Sidebar entry as rendered for one request"""
    item: NavigationItem
    active: bool


@dataclass(frozen=True)
class PlaceholderPage:
    """Page body for sections that are not built yet"""
    title: str
    message: str


@dataclass(frozen=True)
class ResolvedRoute:
    path: str
    links: Tuple[NavLink, ...]
    active_item: Optional[NavigationItem]
    placeholder: Optional[PlaceholderPage]

    @property
    def is_fallback(self) -> bool:
        return self.active_item is None


NAVIGATION_ITEMS: Tuple[NavigationItem, ...] = (
    NavigationItem("Dashboard", "/", "home"),
    NavigationItem("Register User", "/register", "user-add"),
    NavigationItem("User Management", "/users", "users"),
    NavigationItem("Inventory", "/inventory", "package"),
    NavigationItem("Analytics", "/analytics", "chart-bar"),
    NavigationItem("Settings", "/settings", "cog"),
)

UNDER_DEVELOPMENT = "This page is under development."

PLACEHOLDER_PAGES = {
    "/inventory": PlaceholderPage("Inventory Management", UNDER_DEVELOPMENT),
    "/analytics": PlaceholderPage("Analytics & Reports", UNDER_DEVELOPMENT),
    "/settings": PlaceholderPage("System Settings", UNDER_DEVELOPMENT),
}

FALLBACK_PAGE = PlaceholderPage(
    "Page Coming Soon",
    "This page is under development. Check back later!"
)


def resolve_route(path: str, items: Tuple[NavigationItem, ...] = NAVIGATION_ITEMS) -> ResolvedRoute:
    """
    Mark the navigation entry whose path equals the request path.

    Matching is exact, so "/users/42" activates nothing. Unknown paths get the
    fallback placeholder instead of an error.
    """
    active_item = next((item for item in items if item.path == path), None)
    links = tuple(NavLink(item=item, active=item is active_item) for item in items)

    if active_item is None:
        placeholder = FALLBACK_PAGE
    else:
        placeholder = PLACEHOLDER_PAGES.get(active_item.path)

    return ResolvedRoute(
        path=path,
        links=links,
        active_item=active_item,
        placeholder=placeholder
    )

"""
User listing view state
"""

from dataclasses import dataclass
from typing import List, Union

import structlog

from inventory_admin.models.user import ProfileRecord
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.exceptions import StoreError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ListingLoading:
    pass


@dataclass(frozen=True)
class ListingLoaded:
    records: List[ProfileRecord]

    @property
    def is_empty(self) -> bool:
        return not self.records


@dataclass(frozen=True)
class ListingErrored:
    message: str


ListingState = Union[ListingLoading, ListingLoaded, ListingErrored]


class UserListing:
    """Full re-fetch on every refresh, no caching"""

    def __init__(self, profile_store: ProfileStore):
        self.profile_store = profile_store
        self.state: ListingState = ListingLoading()

    async def refresh(self) -> ListingState:
        self.state = ListingLoading()
        try:
            records = await self.profile_store.list_all()
        except StoreError as e:
            logger.error("Error fetching users", error=e.message)
            self.state = ListingErrored(message=e.message)
        else:
            self.state = ListingLoaded(records=records)
        return self.state

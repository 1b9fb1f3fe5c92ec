"""
User listing view state tests
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from inventory_admin.admin.listing import ListingErrored, ListingLoaded, ListingLoading, UserListing
from inventory_admin.utils.exceptions import StoreError


class TestUserListing:

    def test_starts_loading(self, mock_profile_store):
        assert isinstance(UserListing(mock_profile_store).state, ListingLoading)

    @pytest.mark.asyncio
    async def test_refresh_loaded(self, mock_profile_store, sample_profiles):
        mock_profile_store.list_all = AsyncMock(return_value=sample_profiles)
        listing = UserListing(mock_profile_store)

        state = await listing.refresh()

        assert isinstance(state, ListingLoaded)
        assert state.records == sample_profiles
        assert listing.state is state

    @pytest.mark.asyncio
    async def test_empty_store_is_not_an_error(self, mock_profile_store):
        listing = UserListing(mock_profile_store)

        state = await listing.refresh()

        assert isinstance(state, ListingLoaded)
        assert state.is_empty

    @pytest.mark.asyncio
    async def test_store_error(self, mock_profile_store):
        mock_profile_store.list_all = AsyncMock(side_effect=StoreError("connection refused"))
        listing = UserListing(mock_profile_store)

        state = await listing.refresh()

        assert isinstance(state, ListingErrored)
        assert state.message == "connection refused"

    @pytest.mark.asyncio
    async def test_loading_while_request_outstanding(self, mock_profile_store, sample_profiles):
        release = asyncio.Event()

        async def slow_list_all():
            await release.wait()
            return sample_profiles

        mock_profile_store.list_all = slow_list_all
        listing = UserListing(mock_profile_store)
        listing.state = ListingErrored(message="previous failure")

        task = asyncio.create_task(listing.refresh())
        await asyncio.sleep(0)
        assert isinstance(listing.state, ListingLoading)

        release.set()
        state = await task
        assert isinstance(state, ListingLoaded)

    @pytest.mark.asyncio
    async def test_each_refresh_refetches(self, mock_profile_store):
        listing = UserListing(mock_profile_store)

        await listing.refresh()
        await listing.refresh()

        assert mock_profile_store.list_all.await_count == 2

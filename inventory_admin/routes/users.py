"""
User Management Routes
Read-only access to the trigger-populated user profiles
"""

from fastapi import APIRouter, HTTPException, status

from inventory_admin.models.user import ProfileListResponse, ProfileResponse
from inventory_admin.utils.dependencies import ProfileStoreDep

router = APIRouter()


@router.get("", response_model=ProfileListResponse)
async def list_users(profile_store: ProfileStoreDep):
    """All registered users, newest first"""
    records = await profile_store.list_all()
    return ProfileListResponse(
        users=[ProfileResponse.from_record(record) for record in records],
        total=len(records)
    )


@router.get("/{auth_id}", response_model=ProfileResponse)
async def get_user(auth_id: str, profile_store: ProfileStoreDep):
    """Profile for an identity provider user ID"""
    profile = await profile_store.find_by_auth_id(auth_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return ProfileResponse.from_record(profile)

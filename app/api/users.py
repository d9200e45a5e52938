"""Admin user management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_user_store, require_admin
from app.schemas.auth import CurrentUser, ProfileUpdateRequest, UserPublic, UsersListResponse
from app.services import user_service
from app.services.user_store import UserStore

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=user_service.MAX_PAGE_SIZE)] = 10,
) -> UsersListResponse:
    """List users, newest first (admin only)."""
    return user_service.list_users(store, page=page, limit=limit)


@router.get("/{user_id}", response_model=UserPublic)
def get_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserPublic:
    return user_service.get_user(store, user_id)


@router.put("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: int,
    body: ProfileUpdateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserPublic:
    """Update another user's profile fields (admin only)."""
    return user_service.update_user(store, user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> Response:
    user_service.delete_user(store, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Admin-side user management: paginated listing, lookup, update and deletion."""

import logging
import math

from app.core.exceptions import NotFoundError
from app.schemas.auth import Pagination, ProfileUpdateRequest, UserPublic, UsersListResponse
from app.services.auth_service import PROFILE_FIELDS
from app.services.user_store import UserStore

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def list_users(store: UserStore, page: int = 1, limit: int = 10) -> UsersListResponse:
    """Return one page of users (newest first) with pagination info."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    users, total = store.list_page(offset=(page - 1) * limit, limit=limit)
    return UsersListResponse(
        users=[UserPublic.model_validate(u) for u in users],
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            pages=math.ceil(total / limit) if total else 0,
        ),
    )


def get_user(store: UserStore, user_id: int) -> UserPublic:
    user = store.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserPublic.model_validate(user)


def update_user(store: UserStore, user_id: int, body: ProfileUpdateRequest) -> UserPublic:
    """Apply the same profile fields a user may edit on their own account."""
    changes = {k: v for k, v in body.changes().items() if k in PROFILE_FIELDS}
    if not changes:
        return get_user(store, user_id)
    user = store.update(user_id, changes)
    logger.info("User updated by admin", extra={"user_id": user_id, "fields": sorted(changes)})
    return UserPublic.model_validate(user)


def delete_user(store: UserStore, user_id: int) -> None:
    store.delete(user_id)

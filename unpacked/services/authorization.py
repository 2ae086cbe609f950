# File: unpacked/services/authorization.py

"""
Outfit access rules.

Every outfit endpoint funnels through ``authorize_outfit`` with the caller
passed in explicitly. The rules:

  - read:           public outfits, or the owner
  - update/delete:  owner only; anyone else gets a 404 so that other
                    users' outfits are not confirmed to exist
  - save:           public only (403), and never something the caller
                    already owns or already has a copy of (409)
  - share:          public only (403)
"""

import enum

from unpacked.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from unpacked.core.security import CallerContext


class OutfitAction(str, enum.Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    SAVE = "save"
    SHARE = "share"


OUTFIT_NOT_FOUND = "Outfit not found"
OUTFIT_NOT_FOUND_OR_DENIED = "Outfit not found or access denied"
CANNOT_SAVE_PRIVATE = "Cannot save private outfits"
CANNOT_SHARE_PRIVATE = "Cannot share private outfits"
ALREADY_OWNED = "You already have this outfit"

_REQUIRES_SESSION = {
    OutfitAction.UPDATE,
    OutfitAction.DELETE,
    OutfitAction.SAVE,
    OutfitAction.SHARE,
}


def normalize_outfit_name(name: str) -> str:
    """Names that differ only in case or surrounding/inner spacing are the same outfit."""
    return " ".join(name.split()).casefold()


def authorize_outfit(
    caller: CallerContext,
    *,
    owner_user_id: int,
    is_private: bool,
    action: OutfitAction,
    caller_has_copy: bool = False,
) -> None:
    """
    Raise if ``caller`` may not perform ``action`` on the outfit; return None otherwise.

    ``caller_has_copy`` only matters for SAVE: whether the caller already owns
    an outfit with the same normalized name.
    """
    if action in _REQUIRES_SESSION and not caller.is_authenticated:
        raise UnauthorizedError("Unauthorized")

    is_owner = caller.owns(owner_user_id)

    if action is OutfitAction.READ:
        if is_private and not is_owner:
            raise NotFoundError(OUTFIT_NOT_FOUND)
        return

    if action in (OutfitAction.UPDATE, OutfitAction.DELETE):
        if not is_owner:
            raise NotFoundError(OUTFIT_NOT_FOUND_OR_DENIED)
        return

    if action is OutfitAction.SAVE:
        if is_private:
            raise ForbiddenError(CANNOT_SAVE_PRIVATE)
        if is_owner or caller_has_copy:
            raise ConflictError(ALREADY_OWNED)
        return

    if action is OutfitAction.SHARE:
        if is_private:
            raise ForbiddenError(CANNOT_SHARE_PRIVATE)
        return

    raise ValueError(f"Unknown outfit action: {action!r}")

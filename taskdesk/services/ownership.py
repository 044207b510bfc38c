"""
Ownership checks for single-resource lookups.

Two masking policies coexist and are chosen explicitly at every lookup site:

- tasks are masked: touching someone else's task looks exactly like a missing
  one (404), so task ids never leak;
- user profiles are forbidden: asking for another user's profile is a 403.
"""
from enum import Enum
import logging

from taskdesk.errors import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)


class OwnershipPolicy(str, Enum):
    MASK_AS_NOT_FOUND = "mask_as_not_found"
    FORBID = "forbid"


def enforce_ownership(
    owner_id: str,
    caller_id: str,
    policy: OwnershipPolicy,
    resource: str = "Resource",
) -> None:
    """
    Raise unless ``caller_id`` owns the resource.

    Raises:
        NotFoundError: mismatch under MASK_AS_NOT_FOUND
        AuthorizationError: mismatch under FORBID
    """
    if owner_id == caller_id:
        return

    logger.debug("Ownership check failed for %s (policy=%s)", resource, policy.value)
    if policy is OwnershipPolicy.MASK_AS_NOT_FOUND:
        raise NotFoundError(f"{resource} not found")
    raise AuthorizationError("Forbidden")

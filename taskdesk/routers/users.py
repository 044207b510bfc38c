"""User router: self-service profile management."""
from fastapi import APIRouter, Depends, status

from taskdesk.middleware.auth import get_current_owner
from taskdesk.routers.deps import get_user_service, parse_resource_id
from taskdesk.schemas.auth import RegisterRequest, UserList, UserProfile, UserUpdateRequest
from taskdesk.schemas.common import Acknowledgement, ApiResponse, ok
from taskdesk.services.ownership import OwnershipPolicy
from taskdesk.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.get("", response_model=ApiResponse[UserList], response_model_exclude_unset=True)
async def list_users(
    owner_id: str = Depends(get_current_owner),
    service: UserService = Depends(get_user_service),
):
    """Users visible to the caller: only themselves."""
    user = service.get_by_id(owner_id)
    items = [UserProfile.from_user(user)] if user else []
    return ok(UserList(items=items))


@router.post(
    "",
    response_model=ApiResponse[UserProfile],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(request: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Create a user account (same contract as /auth/register)."""
    user = service.register(request.email, request.password, request.display_name)
    return ok(UserProfile.from_user(user))


@router.get("/{user_id}", response_model=ApiResponse[UserProfile], response_model_exclude_unset=True)
async def get_user(
    user_id: str,
    owner_id: str = Depends(get_current_owner),
    service: UserService = Depends(get_user_service),
):
    """Read the caller's own profile; any other id is forbidden."""
    user = service.get_owned(owner_id, parse_resource_id(user_id), OwnershipPolicy.FORBID)
    return ok(UserProfile.from_user(user))


@router.put("/{user_id}", response_model=ApiResponse[UserProfile], response_model_exclude_unset=True)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    owner_id: str = Depends(get_current_owner),
    service: UserService = Depends(get_user_service),
):
    """Update email, display name or password (with the current password)."""
    user = service.get_owned(owner_id, parse_resource_id(user_id), OwnershipPolicy.FORBID)
    user = service.update_profile(
        user,
        email=request.email,
        display_name=request.display_name,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    return ok(UserProfile.from_user(user))


@router.delete("/{user_id}", response_model=ApiResponse[Acknowledgement], response_model_exclude_unset=True)
async def delete_user(
    user_id: str,
    owner_id: str = Depends(get_current_owner),
    service: UserService = Depends(get_user_service),
):
    """Delete the caller's account and every task it owns."""
    user = service.get_owned(owner_id, parse_resource_id(user_id), OwnershipPolicy.FORBID)
    service.delete(user)
    return ok(Acknowledgement(success=True))

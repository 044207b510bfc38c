"""Authentication router: register, login, logout, current profile."""
from fastapi import APIRouter, Depends, status
from datetime import datetime, timedelta, timezone
import jwt

from taskdesk.config import AUTH_SECRET, TOKEN_ALGORITHM, TOKEN_TTL_SECONDS
from taskdesk.errors import AuthenticationError
from taskdesk.middleware.auth import get_current_owner
from taskdesk.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserProfile
from taskdesk.schemas.common import Acknowledgement, ApiResponse, ok
from taskdesk.routers.deps import get_user_service
from taskdesk.services.user_service import UserService

router = APIRouter(tags=["Authentication"])


def create_access_token(user_id: str, email: str) -> str:
    """Sign a bearer token valid for TOKEN_TTL_SECONDS."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + timedelta(seconds=TOKEN_TTL_SECONDS),
    }
    return jwt.encode(payload, AUTH_SECRET, algorithm=TOKEN_ALGORITHM)


@router.post(
    "/register",
    response_model=ApiResponse[UserProfile],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def register(request: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Create a user account and return its profile."""
    user = service.register(request.email, request.password, request.display_name)
    return ok(UserProfile.from_user(user))


@router.post("/login", response_model=ApiResponse[LoginResponse], response_model_exclude_unset=True)
async def login(request: LoginRequest, service: UserService = Depends(get_user_service)):
    """Verify credentials and issue a bearer token."""
    user = service.authenticate(request.email, request.password)
    token = create_access_token(user.id, user.email)
    return ok(LoginResponse(
        token=token,
        expires_in=TOKEN_TTL_SECONDS,
        user=UserProfile.from_user(user),
    ))


@router.post("/logout", response_model=ApiResponse[Acknowledgement], response_model_exclude_unset=True)
async def logout(owner_id: str = Depends(get_current_owner)):
    """Tokens are stateless; the client simply discards its token."""
    return ok(Acknowledgement(success=True))


@router.get("/me", response_model=ApiResponse[UserProfile], response_model_exclude_unset=True)
async def me(
    owner_id: str = Depends(get_current_owner),
    service: UserService = Depends(get_user_service),
):
    """Profile of the authenticated user."""
    user = service.get_by_id(owner_id)
    if user is None:
        # Token outlived its account
        raise AuthenticationError("Unauthorized")
    return ok(UserProfile.from_user(user))

"""JWT authentication dependencies for FastAPI."""
from fastapi import Depends, Request
from jose import jwt, JWTError
from typing import Any, Dict, Optional
import logging

from taskdesk.config import AUTH_SECRET, TOKEN_ALGORITHM
from taskdesk.errors import AuthenticationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from ``"Bearer <token>"``, or None if absent or malformed."""
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    token = auth_header[len(BEARER_PREFIX):].strip()
    return token or None


class TokenVerifier:
    """Verifies signed, time-bound bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Decode and verify a token.

        Raises:
            JWTError: on bad signature, expiry or malformed token
        """
        return jwt.decode(token, self.secret, algorithms=[self.algorithm])

    def resolve_owner(self, token: str) -> Optional[str]:
        """
        Identity carried by a token.

        Returns:
            The ``sub`` claim, or None for any verification failure
        """
        try:
            payload = self.decode(token)
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except JWTError as e:
            logger.info("Rejected invalid token: %s", e)
            return None

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            logger.info("Rejected token without a subject")
            return None
        return user_id


_verifier = TokenVerifier(AUTH_SECRET, TOKEN_ALGORITHM)


def get_token_verifier() -> TokenVerifier:
    """Dependency returning the token verifier (overridable in tests)."""
    return _verifier


async def get_current_owner(
    request: Request,
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    """
    Resolve the caller's user id from the Authorization header.

    Raises:
        AuthenticationError: if the header is missing/malformed or the token is invalid
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if token is None:
        raise AuthenticationError("Unauthorized")

    owner_id = verifier.resolve_owner(token)
    if owner_id is None:
        raise AuthenticationError("Unauthorized")
    return owner_id

"""Health check endpoint."""
import time
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from taskdesk.db.config import get_session
from taskdesk.errors import DependencyError
from taskdesk.models.user import User
from taskdesk.schemas.common import fail

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

STARTED_AT = time.monotonic()


def check_database(session: Session) -> None:
    """Round-trip a trivial query; raises DependencyError if storage is unreachable."""
    try:
        session.exec(select(User.id).limit(1)).first()
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        raise DependencyError("Database unreachable")


@router.get("/health")
async def health_check(session: Session = Depends(get_session)):
    """Liveness plus storage reachability."""
    try:
        check_database(session)
    except DependencyError as e:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=fail(e.message))

    return {
        "success": True,
        "data": {
            "status": "ok",
            "uptimeSeconds": int(time.monotonic() - STARTED_AT),
            "db": "ok",
        },
    }

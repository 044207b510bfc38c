"""Main FastAPI application for the taskdesk API."""
from fastapi import FastAPI

from taskdesk import __version__
from taskdesk.db.init import init_db
from taskdesk.middleware.cors import add_cors_middleware
from taskdesk.middleware.errors import add_exception_handlers
from taskdesk.routers import (
    auth_router,
    dashboard_router,
    health_router,
    tasks_router,
    users_router,
)
from taskdesk.utils.logger import get_logger

app_logger = get_logger("taskdesk")

app = FastAPI(
    title="taskdesk API",
    description="Personal task management: tasks, filters, tags and a workload dashboard",
    version=__version__,
)

add_cors_middleware(app)
add_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Create database tables on startup."""
    try:
        init_db()
        app_logger.info("Database tables initialized")
    except Exception as e:
        # /health reports the outage; keep serving so it can
        app_logger.exception("Database initialization failed", error=str(e))
    app_logger.info("Application startup complete", version=__version__)


@app.get("/")
async def root():
    """Root endpoint - API welcome message."""
    return {
        "success": True,
        "data": {
            "title": "taskdesk API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        },
    }


app.include_router(auth_router, prefix="/auth")
app.include_router(users_router, prefix="/users")
app.include_router(tasks_router, prefix="/tasks")
app.include_router(dashboard_router, prefix="/dashboard")
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "taskdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

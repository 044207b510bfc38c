"""Environment configuration for the taskdesk API."""
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskdesk.db")

AUTH_SECRET = os.environ.get("AUTH_SECRET", "taskdesk-development-secret-change-me-please")
TOKEN_ALGORITHM = os.environ.get("TOKEN_ALGORITHM", "HS256")
TOKEN_TTL_SECONDS = int(os.environ.get("TOKEN_TTL_SECONDS", "86400"))

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the repo root .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./fifteen_minutes.db")
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

# Task durations in minutes
DEFAULT_TASK_DURATION = int(os.getenv("DEFAULT_TASK_DURATION", "15"))
LONG_TASK_DURATION = int(os.getenv("LONG_TASK_DURATION", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

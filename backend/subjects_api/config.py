"""
Configuration - env vars, constants, logging setup.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent
load_dotenv(ROOT_DIR / '.env')

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("subjects")

# MongoDB
MONGO_URL = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
DB_NAME = os.environ.get("DB_NAME", "subjects")

if "MONGO_URL" not in os.environ:
    logger.warning("⚠️ No MONGO_URL found - falling back to %s", MONGO_URL)

# CORS
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000"
]


def get_cors_origins():
    """Get allowed CORS origins from the comma-separated CORS_ORIGINS env var."""
    cors_origins_env = os.environ.get("CORS_ORIGINS")
    if not cors_origins_env:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in cors_origins_env.split(",") if origin.strip()]


def get_version_info():
    """Get deployment version information."""
    git_commit = os.environ.get("GIT_COMMIT_SHA")
    if not git_commit:
        commit_file = ROOT_DIR / ".git_commit"
        try:
            if commit_file.exists():
                git_commit = commit_file.read_text().strip()
        except OSError as e:
            logger.warning(f"Could not read {commit_file}: {e}")

    if not git_commit:
        logger.warning("GIT_COMMIT_SHA not set and .git_commit not found. Build pipeline issue?")
        git_commit = "unknown"

    build_time = os.environ.get("BUILD_TIME", "unknown")
    env = os.environ.get("ENV", os.environ.get("ENVIRONMENT", "development"))

    return {
        "git_commit": git_commit,
        "build_time": build_time,
        "environment": env
    }

"""Application configuration."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "publishing_platforms_comparison.csv"


class Config:
    """Flask settings, read once from the environment."""

    # Dataset
    PLATFORM_DATA_PATH = os.getenv("PLATFORM_DATA_PATH", str(DEFAULT_DATA_PATH))

    # Requests
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(1024 * 1024)))  # 1MB

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ghdash/core/config.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()  # load from .env

DEFAULT_DB_PATH = Path.home() / ".ghdash" / "ghdash.db"


class Settings:
    GHDASH_DB_PATH: str = os.getenv("GHDASH_DB_PATH", str(DEFAULT_DB_PATH))
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_TIMEOUT_SECONDS: float = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "10"))
    GHDASH_REFRESH_INTERVAL: int = int(os.getenv("GHDASH_REFRESH_INTERVAL", "900"))  # seconds
    GHDASH_PR_PAGE_SIZE: int = int(os.getenv("GHDASH_PR_PAGE_SIZE", "50"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()

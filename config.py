"""Application configuration loaded from environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the RepairShop backend."""

    # Empty means "remote database not configured": the app runs local-only.
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    LOCAL_STORE_DIR: str = os.getenv("LOCAL_STORE_DIR", "./data")
    LOCAL_STORE_PREFIX: str = os.getenv("LOCAL_STORE_PREFIX", "shop_")
    TRUST_EMPTY_REMOTE: bool = _as_bool(os.getenv("TRUST_EMPTY_REMOTE", "false"))
    WARRANTY_EXPIRING_DAYS: int = int(os.getenv("WARRANTY_EXPIRING_DAYS", "7"))
    DEFAULT_WARRANTY_DAYS: int = int(os.getenv("DEFAULT_WARRANTY_DAYS", "30"))
    DEFAULT_PAYMENT_METHOD: str = os.getenv("DEFAULT_PAYMENT_METHOD", "cash")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()

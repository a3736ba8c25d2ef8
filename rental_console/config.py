"""Application configuration, overridable from the environment."""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    APP_ENV = os.getenv("APP_ENV", "development")

    # pickle file backing the Store singleton
    DATA_PATH = os.getenv("RENTAL_CONSOLE_DATA", str(BASE_DIR / "data.pkl"))

    # pytz zone used when rendering stored instants
    DISPLAY_TZ = os.getenv("DISPLAY_TZ", "UTC")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


"""Server configuration read from the environment."""

import os


def _origins(value: str):
    """'*' allows any origin; otherwise a comma-separated list."""
    if value.strip() == "*":
        return "*"
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "ashakk-dev-secret"
    # Seats per room and players needed to start
    MAX_PLAYERS = int(os.environ.get("MAX_PLAYERS", "4"))
    MIN_PLAYERS = int(os.environ.get("MIN_PLAYERS", "2"))
    CORS_ORIGINS = _origins(os.environ.get("CORS_ORIGINS", "*"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", "3001"))


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    LOG_LEVEL = "DEBUG"

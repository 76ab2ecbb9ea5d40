import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./panel.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    LOCALE = data.get("LOCALE", "en")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))
    # An explicit `ACTIVITY_PRUNE_DAYS: null` is a misconfiguration, caught at startup
    ACTIVITY_PRUNE_DAYS = data.get("ACTIVITY_PRUNE_DAYS", 90)
    PASSWORD_RESET_EXPIRE_MINUTES = data.get("PASSWORD_RESET_EXPIRE_MINUTES", 60)
    PASSWORD_RESET_THROTTLE_SECONDS = data.get("PASSWORD_RESET_THROTTLE_SECONDS", 60)
    RESET_REDIRECT_TO = data.get("RESET_REDIRECT_TO", "/")

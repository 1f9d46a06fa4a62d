import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def as_bool(value) -> bool:
    """YAML flags may arrive as booleans, numbers or strings like "false"."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = as_bool(data.get("CORS_ALLOW_CREDENTIALS", True))
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    PASSWORD_RESET_TOKEN_TTL_MINUTES = int(data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 45))
    PASSWORD_RESET_URL = data.get("PASSWORD_RESET_URL", "http://localhost:3000/reset-password")
    TOKEN_SWEEP_ENABLED = as_bool(data.get("TOKEN_SWEEP_ENABLED", False))
    TOKEN_SWEEP_INTERVAL_MINUTES = int(data.get("TOKEN_SWEEP_INTERVAL_MINUTES", 60))

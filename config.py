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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./engagement.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    INVITE_DEFAULT_EXPIRY_HOURS = int(data.get("INVITE_DEFAULT_EXPIRY_HOURS", 168))
    INVITE_CODE_LENGTH = int(data.get("INVITE_CODE_LENGTH", 10))
    REWARD_PROVIDER_BASE_URL = data.get("REWARD_PROVIDER_BASE_URL", "")
    REWARD_PROVIDER_API_KEY = data.get("REWARD_PROVIDER_API_KEY", "")
    REWARD_PROVIDER_PROGRAM_ID = data.get("REWARD_PROVIDER_PROGRAM_ID", "")
    REWARD_PROVIDER_TIMEOUT_SECONDS = float(data.get("REWARD_PROVIDER_TIMEOUT_SECONDS", 10.0))

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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./otp_login.db")
    STORE_TIMEOUT_SECONDS = float(data.get("STORE_TIMEOUT_SECONDS", 5))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")

    # Session credential
    SESSION_SECRET = data.get("SESSION_SECRET", "dev-secret-key-change-in-production")
    SESSION_MAX_AGE_SECONDS = int(data.get("SESSION_MAX_AGE_SECONDS", 7 * 24 * 60 * 60))
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session")
    SESSION_COOKIE_SECURE = bool(
        data.get("SESSION_COOKIE_SECURE", ENVIRONMENT == "production")
    )
    SESSION_COOKIE_PERSISTENT = bool(data.get("SESSION_COOKIE_PERSISTENT", True))

    # Login sessions / OTP
    OTP_LENGTH = int(data.get("OTP_LENGTH", 6))
    OTP_CODE_TTL_MINUTES = int(data.get("OTP_CODE_TTL_MINUTES", 10))
    LOGIN_SESSION_TTL_MINUTES = int(data.get("LOGIN_SESSION_TTL_MINUTES", 15))
    RESEND_COOLDOWN_SECONDS = int(data.get("RESEND_COOLDOWN_SECONDS", 30))
    VERIFY_MAX_ATTEMPTS = int(data.get("VERIFY_MAX_ATTEMPTS", 5))
    LOGIN_MAX_ATTEMPTS = int(data.get("LOGIN_MAX_ATTEMPTS", 5))
    LOGIN_RATE_WINDOW_MINUTES = int(data.get("LOGIN_RATE_WINDOW_MINUTES", 15))

    # Outbound email
    MAIL_BACKEND = data.get("MAIL_BACKEND", "log")
    MAIL_SERVER = data.get("MAIL_SERVER", "localhost")
    MAIL_PORT = int(data.get("MAIL_PORT", 587))
    MAIL_USERNAME = data.get("MAIL_USERNAME")
    MAIL_PASSWORD = data.get("MAIL_PASSWORD")
    MAIL_FROM = data.get("MAIL_FROM", "no-reply@example.com")
    MAIL_FROM_NAME = data.get("MAIL_FROM_NAME", "Ngozi Umoru")
    MAIL_TIMEOUT_SECONDS = float(data.get("MAIL_TIMEOUT_SECONDS", 10))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class SeedSettings(BaseModel):
    enabled: bool = Field(default=_env_flag("SEED_MANAGER", "true"))
    name: str = Field(default=os.getenv("SEED_MANAGER_NAME", "Manager"))
    email: str = Field(default=os.getenv("SEED_MANAGER_EMAIL", "manager@example.com"))
    password: str = Field(default=os.getenv("SEED_MANAGER_PASSWORD", "pass"))


class Config(BaseModel):
    app_name: str = "Vacay HR API"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./vacay.db")

    # Session cookie
    secret_key: str = os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    session_cookie: str = os.getenv("SESSION_COOKIE", "vacay_session")
    session_max_age: int = int(os.getenv("SESSION_MAX_AGE", str(14 * 24 * 60 * 60)))
    session_https_only: bool = _env_flag("SESSION_HTTPS_ONLY", "false")

    # Credentials
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    employee_code_max_attempts: int = int(os.getenv("EMPLOYEE_CODE_MAX_ATTEMPTS", "100"))

    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins; defaults to the Vite dev server.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
            if o.strip()
        ]
    )

    rate_limit_enabled: bool = _env_flag("RATE_LIMIT_ENABLED", "true")
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "20"))

    expose_error_detail: bool = _env_flag("EXPOSE_ERROR_DETAIL", "true")

    seed: SeedSettings = SeedSettings()


settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    if "dev-only" in settings.secret_key:
        raise RuntimeError(
            "FATAL: SECRET_KEY must be set for non-development environments. "
            "Set it as an environment variable."
        )
else:
    if "dev-only" in settings.secret_key:
        _logger.warning("⚠ Using insecure default SECRET_KEY — only acceptable in development.")

"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

Settings and the non-env business constants (model allow-list, storage folders, icon set) live here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: portfolio/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "Portfolio"
    app_version: str = "1.0.0"
    port: int = 8001

    # Database (document store)
    database_url: str = "sqlite:///./portfolio.db"

    # Admin auth - tokens are issued by the hosted auth provider, verified here
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Redis
    redis_url: str = ""

    # Cache TTLs (seconds)
    portfolio_cache_ttl: int = 300

    # HTTP / network
    http_request_timeout: int = 40  # chat widget -> gateway; must exceed chat_default_timeout_ms
    gateway_base_url: str = "http://localhost:8001"

    # AWS S3 (object storage for profile and project images)
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "ap-southeast-1"
    aws_bucket_name: str = "portfolio-assets"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    chat_default_timeout_ms: int = 30000
    chat_assistant_name: str = "Hira"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


# --- Constants (non-env, business config) ---

# Chat gateway
CHAT_ALLOWED_ROLES: tuple[str, ...] = ("system", "user", "assistant")
CHAT_ALLOWED_MODELS: tuple[str, ...] = ("gpt-4o-mini", "gpt-4o", "gpt-4.1-mini")
CHAT_DEFAULT_TEMPERATURE: float = 0.7
CHAT_DEFAULT_MAX_TOKENS: int = 1024
CHAT_DEFAULT_TOP_P: float = 1.0

# Chat sessions
ANONYMOUS_EMAIL: str = "anonymous"
PROFILE_DOC_ID: str = "main"

# Object storage folders
STORAGE_FOLDERS: tuple[str, ...] = ("profile", "projects")

# Project icons (closed set; unknown names fall back to the default)
PROJECT_ICONS: tuple[str, ...] = (
    "code", "globe", "smartphone", "database", "cpu", "layout", "terminal", "brain",
)
DEFAULT_PROJECT_ICON: str = "code"

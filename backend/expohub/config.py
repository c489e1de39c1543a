# expohub/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _database_url() -> str:
    """
    Resolve the database URL.
    DATABASE_URL wins; otherwise it is assembled from the PG* variables.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("PGHOST", "127.0.0.1")
    port = os.getenv("PGPORT", "5432")
    user = os.getenv("PGUSER", "postgres")
    password = os.getenv("PGPASSWORD", "postgres")
    database = os.getenv("PGDATABASE", "expohub")
    return f"postgres://{user}:{password}@{host}:{port}/{database}"


def _truthy(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "ExpoHub API"
    VERSION: str = "1.0.0"
    env: str = os.getenv("ENV", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Database
    database_url: str = _database_url()
    # Create tables on startup (local development / tests); production uses managed schemas
    db_generate_schemas: bool = _truthy(os.getenv("DB_GENERATE_SCHEMAS", "false"))

    # Token signing
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")
    access_token_expire_days: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "7"))

    # CORS origins for the SPA (FRONTEND_URL may hold a comma-separated list)
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("FRONTEND_URL", "http://localhost:5173").split(",")
        if origin.strip()
    ]

    # Default admin created on first startup (skipped without a password)
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_name: str = os.getenv("ADMIN_NAME", "Administrator")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")

settings = Settings()  # Instantiate configuration

"""
Gestão de OS - Configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
import secrets
from pathlib import Path
from dotenv import load_dotenv

# Carrega .env com override para sobrescrever variáveis do sistema
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Gestão de OS"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./oficina.db"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Auth gateway (cookie JWT)
    AUTH_ENABLED: bool = True
    AUTH_COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Rate limit
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "10/minute"

    # CORS
    CORS_ORIGINS: list = ["*"]

    # Ordens de serviço
    INITIAL_STATUS_NAME: str = "Pendente"
    SEED_DEFAULT_STATUS: bool = True

    # Paginação
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 1000

    # Relatórios
    COMPANY_NAME: str = "WS Service Solutions"

    class Config:
        extra = "ignore"
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

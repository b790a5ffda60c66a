from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "FILEDROP API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "*"

    # Security (JWT)
    JWT_SECRET: str = "changeme!"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 120

    # Storage
    STORAGE_PATH: str = "./uploads"
    DATABASE_URL: str = "sqlite:///./users.db"

    # Preview
    PREVIEW_MAX_LINES: int = 20

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()

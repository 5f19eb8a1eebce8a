from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "boardgame-list"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite+pysqlite:///./boardgames.db"
    REDIS_URL: str = ""  # empty -> in-process list cache

    JWT_SECRET: str = "change_me_jwt"
    JWT_ISSUER: str = "boardgame-list"
    JWT_TTL_MINUTES: int = 300

    CORS_ORIGINS: str = "http://localhost:3000"

    LIST_CACHE_TTL_SECONDS: int = 30
    LIST_DEFAULT_PAGE_SIZE: int = 10
    LIST_MAX_PAGE_SIZE: int = 100
    LIST_MAX_FILTER_LENGTH: int = 200
    LIST_RESPONSE_MAX_AGE_SECONDS: int = 60

    USE_DEVELOPER_EXCEPTION_PAGE: bool = False

    ADMIN_BOOTSTRAP_ENABLED: bool = True
    ADMIN_BOOTSTRAP_USERNAME: str = "admin"
    ADMIN_BOOTSTRAP_PASSWORD: str = "admin123"
    ADMIN_BOOTSTRAP_EMAIL: str = "admin@example.com"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()

from typing import Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "datasources"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True

    # --- Relational store (MySQL via SQLAlchemy async) ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "app_db"
    DB_ECHO: bool = False
    DB_URL_OVERRIDE: Optional[str] = None  # e.g. sqlite+aiosqlite:///./local.db

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL_OVERRIDE:
            return self.DB_URL_OVERRIDE
        # Build async MySQL connection URL
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- Document store (MongoDB via motor) ---
    MONGO_HOST: str = "localhost"
    MONGO_PORT: int = 27017
    MONGO_USER: Optional[str] = None
    MONGO_PASSWORD: Optional[str] = None
    MONGO_DB: str = "app_db"
    MONGO_REPLICA_SET: Optional[str] = None  # transactions need a replica set or sharded cluster

    @property
    def MONGO_URL(self) -> str:
        credentials = ""
        if self.MONGO_USER:
            credentials = quote_plus(self.MONGO_USER)
            if self.MONGO_PASSWORD:
                credentials += f":{quote_plus(self.MONGO_PASSWORD)}"
            credentials += "@"
        url = f"mongodb://{credentials}{self.MONGO_HOST}:{self.MONGO_PORT}/"
        if self.MONGO_REPLICA_SET:
            url += f"?replicaSet={self.MONGO_REPLICA_SET}"
        return url

    # --- API route prefixes ---
    API_V1_CATALOG_PREFIX: str = "/api/v1/catalog"

    # --- Logging ---
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()

import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_NAME: str = "Asset Inventory"

    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    JWT_ISSUER: str = "asset-inventory-api"

    # Full URL wins over the DB_* parts
    DATABASE_URL: Optional[str] = None
    DB_USER: str = "inventory"
    DB_PASS: str = "inventory"
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_NAME: str = "asset_inventory"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]
    LOG_LEVEL: str = "INFO"

    # Where a returned asset goes back to
    RETURN_BUILDING: str = "warehouse"
    RETURN_OFFICE: str = "general storage"

    DEFAULT_UPCOMING_DAYS: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
)

import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "BongoPortus Inventory"
    SECRET_KEY: str = os.getenv("SECRET_KEY", "secret")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./bongoportus.db")

    # The single admin allowed to log in
    ADMIN_EMAIL: str = "admin@bongoportus.com"
    ADMIN_PASSWORD: str = "admin123"

    TIMEZONE: str = "UTC"
    STATIC_DIR: str = "static"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"

settings = Settings()

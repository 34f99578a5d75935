# classgroups/config/settings.py

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./classgroups.db"
    LOG_LEVEL: str = "INFO"
    DEFAULT_GROUP_COUNT: int = 4
    MAX_INTERESTS: int = 5
    REQUIRE_ALL_INTERESTS: bool = True
    MIN_NAME_LENGTH: int = 2
    TOP_INTERESTS_LIMIT: int = 15

    class Config:
        env_file = ".env"

settings = Settings()

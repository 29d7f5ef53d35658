from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SERVICE_NAME: str = "harmony-match"
    APP_TITLE: str = "Harmony Match API"
    MIN_BIRTH_YEAR: int = 1920
    YEARS_RANGE_START: int = 1940
    YEARS_RANGE_END: int = 2030
    # Bounds for the years-for-animal lookup
    YEARS_QUERY_MIN: int = 1000
    YEARS_QUERY_MAX: int = 3000
    LOG_LEVEL: str = "INFO"
    LOGGING_ENABLED: bool = False
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"

settings = Settings()

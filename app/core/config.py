from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "BackOffice"
    APP_PORT: int = 9202
    DEBUG: bool = False
    
    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "backoffice"
    POSTGRES_PORT: int = 5432
    DATABASE_URI: Optional[str] = None  # Full URL override (e.g. sqlite:///./backoffice.db)
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOGS_PATH: Optional[str] = None
    
    # Listing
    DEFAULT_PAGE_SIZE: int = 10
    
    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
    
    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()

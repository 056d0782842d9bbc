from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "SplitLedger Backend"
    DATABASE_URL: str = "sqlite+aiosqlite:///./splitledger.db"
    CREATE_TABLES: bool = True
    DB_CONNECT_RETRIES: int = 5
    DB_CONNECT_DELAY: float = 2.0
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    class Config:
        env_file = ".env"

settings = Settings()

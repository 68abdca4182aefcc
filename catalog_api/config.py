"""Application configuration using Pydantic settings."""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file into os.environ before settings are read
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./catalog.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: float = 30.0
    db_timeout_seconds: float = 15.0
    db_statement_timeout_ms: int = 15000

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Seed the sample catalog when the categories table is empty
    seed_on_startup: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    log_level: str = "INFO"
    client_url: str = "http://localhost:5173"


settings = Settings()

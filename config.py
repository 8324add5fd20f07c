import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "3000"))

    # HTTP behaviour
    books_cache_max_age: int = int(os.getenv("BOOKS_CACHE_MAX_AGE", "60"))  # seconds
    gzip_minimum_size: int = int(os.getenv("GZIP_MINIMUM_SIZE", "1000"))  # bytes

    # Store
    seed_books: bool = os.getenv("SEED_BOOKS", "True").lower() in ("true", "1", "yes")

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Books REST API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()

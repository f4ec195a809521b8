"""
Application configuration using Pydantic Settings
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Host settings loaded from RESUME_PARSER_* environment variables"""

    # Parsing
    ENABLE_ROBUST_PARSER: bool = True
    SWAP_TITLE_COMPANY: bool = True  # robust tier only; primary never swaps
    LOCATION_SEARCH_CHARS: int = 500

    # File Upload
    MAX_UPLOAD_SIZE_MB: int = 10

    # Observability
    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "RESUME_PARSER_"
        env_file = ".env"
        case_sensitive = True


settings = Settings()

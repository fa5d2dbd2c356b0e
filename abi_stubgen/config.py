"""
Application configuration
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Generator settings"""

    # Output
    STUBGEN_OUTPUT_DIR: str = "build"

    # Manifest
    STUBGEN_MAX_LINE_LENGTH: int = 256  # bytes

    # Logging
    STUBGEN_LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional, List, Dict


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "Learning Center Admin"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False)

    # Database Settings
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./centerdesk.db")
    DATABASE_ECHO: bool = Field(default=False)

    # Document namespace: artifacts/<installation>/<visibility>/<collection>
    INSTALLATION_ID: str = Field(default="default-app-id")
    DATA_VISIBILITY: str = Field(default="public/data")

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ]
    )

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: Optional[str] = Field(default=None)

    # Localization
    DEFAULT_LANGUAGE: str = Field(default="en")

    # Reporting
    DEFAULT_EXPENSE_CATEGORY: str = Field(default="general")
    UNCATEGORIZED_LABEL: str = Field(default="uncategorized")
    EXPORT_FILENAME: str = Field(default="student_data_by_class.csv")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("DATA_VISIBILITY")
    @classmethod
    def validate_visibility(cls, v: str) -> str:
        return v.strip("/")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

# Initialize settings
settings = Settings()

# Helper Functions
def get_database_url() -> str:
    return settings.DATABASE_URL

def collection_path(collection_name: str, installation: Optional[str] = None, visibility: Optional[str] = None) -> str:
    """Namespaced logical path of a collection"""
    installation = installation or settings.INSTALLATION_ID
    visibility = (visibility or settings.DATA_VISIBILITY).strip("/")
    return f"artifacts/{installation}/{visibility}/{collection_name}"

def get_logging_config() -> Dict[str, Optional[str]]:
    return {
        "log_level": settings.LOG_LEVEL,
        "log_dir": settings.LOG_DIR
    }

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings."""

    def __init__(self):
        # API configuration
        self.API_V1_STR: str = "/api/v1"

        # Project metadata
        self.PROJECT_NAME: str = "Database Import"
        self.PROJECT_DESCRIPTION: str = "Import tabular data from relational databases into projects."
        self.VERSION: str = "0.1.0"

        # CORS configuration
        self.CORS_ORIGINS: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3333,http://127.0.0.1:3333").split(",")
            if origin.strip()
        ]

        # Project store
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./dbimport.db")

        # Importing
        self.DEFAULT_PREVIEW_LIMIT: int = int(os.getenv("DEFAULT_PREVIEW_LIMIT", "100"))
        self.IMPORT_BATCH_SIZE: int = int(os.getenv("IMPORT_BATCH_SIZE", "100"))
        self.LOGIN_TIMEOUT: int = int(os.getenv("LOGIN_TIMEOUT", "10"))
        self.JOB_MAX_AGE_SECONDS: int = int(os.getenv("JOB_MAX_AGE_SECONDS", "3600"))

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Saved connection passwords are encrypted with this Fernet key
        self.DATASOURCE_ENCRYPTION_KEY: str = os.getenv("DATASOURCE_ENCRYPTION_KEY")


settings = Settings()

"""
Application configuration settings for the feedback portal.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings configuration.

    Values are read when the class is instantiated so tests can patch the
    environment before building clients.
    """

    APP_NAME = "Student Feedback Portal"
    APP_VERSION = "1.0.0"

    def __init__(self):
        # Hosted backend (Supabase)
        self.SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
        self.SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
        self.SENTIMENT_FUNCTION = os.getenv("SENTIMENT_FUNCTION", "analyze-sentiment")

        # Network timeouts (seconds)
        self.CLASSIFIER_TIMEOUT_SECONDS = float(os.getenv("CLASSIFIER_TIMEOUT_SECONDS", "10"))
        self.STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

        # Record store backend: "supabase" or "sql"
        self.RECORD_STORE = os.getenv("RECORD_STORE", "sql").lower()

        # Local database (used by the sql record store)
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/feedback.db")
        self.DATABASE_ECHO = os.getenv("DATABASE_ECHO", "False").lower() == "true"

        # Logging
        self.LOG_DIR = os.getenv("LOG_DIR", "logs")

        # API server
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
            if origin.strip()
        ]
        self.API_HOST = os.getenv("API_HOST", "0.0.0.0")
        self.API_PORT = int(os.getenv("API_PORT", "8000"))
        self.API_RELOAD = os.getenv("API_RELOAD", "false").lower() == "true"

    def get_database_url(self) -> str:
        """Get the database URL with proper formatting."""
        return self.DATABASE_URL

    def has_supabase(self) -> bool:
        """Check whether the hosted backend is configured."""
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)

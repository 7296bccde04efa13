# api/utils/config.py
import os
import logging

logger = logging.getLogger("wall_openings.api")

class Config:
    """Service configuration loaded from environment variables"""

    # API authentication
    API_KEY = os.environ.get("API_KEY", "dev_key")

    # Application settings
    DEBUG = os.environ.get("DEBUG", "false").lower() == "true"

    @classmethod
    def validate(cls):
        """Validate critical configuration values"""
        if not cls.API_KEY or cls.API_KEY == "dev_key":
            logger.warning("Using development API key - not secure for production!")

"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import List, Optional
from tasknotes.config.constants import DEFAULT_DATA_FILE, DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""
    
    # Storage (empty value keeps tasks in memory only)
    DATA_FILE: str = os.getenv("DATA_FILE", DEFAULT_DATA_FILE)
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None
    
    # Web server
    WEB_HOST: str = os.getenv("WEB_HOST", "0.0.0.0")
    WEB_PORT: int = int(os.getenv("WEB_PORT", os.getenv("PORT", "5000")))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    
    # Client
    API_BASE_URL: str = os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL)
    API_TIMEOUT: int = int(os.getenv("API_TIMEOUT", str(DEFAULT_API_TIMEOUT)))
    
    @classmethod
    def cors_origins(cls) -> List[str]:
        """Allowed CORS origins as a list"""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]
    
    @classmethod
    def validate(cls) -> bool:
        """Validate settings that have a restricted range"""
        if not 0 < cls.WEB_PORT < 65536:
            raise ValueError(f"WEB_PORT out of range: {cls.WEB_PORT}")
        
        if cls.API_TIMEOUT <= 0:
            raise ValueError(f"API_TIMEOUT must be positive: {cls.API_TIMEOUT}")
        
        return True


# Global settings instance
settings = Settings()

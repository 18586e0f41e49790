import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# First get the environment from ENV variable or default to 'production'
ENV = os.getenv('ENV', 'production')

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Load the appropriate .env file based on environment
def load_env_file():
    # First try to load .env.{ENV} file
    env_file = BASE_DIR / f".env.{ENV}"
    if env_file.exists():
        print(f"Loading environment from {env_file}")
        load_dotenv(dotenv_path=env_file)
        return True

    # Fallback to the standard .env file
    default_env_file = BASE_DIR / ".env"
    if default_env_file.exists():
        print(f"Loading environment from {default_env_file}")
        load_dotenv(dotenv_path=default_env_file)
        return True

    return False

# Load environment variables
env_file_loaded = load_env_file()


# Email provider (Resend)
RESEND_API_URL = "https://api.resend.com/emails"

# Fixed mail routing
EMAIL_FROM = "AutoAIUY <contacto@autoaiuy.com>"
OPERATOR_EMAIL = "contacto@autoaiuy.com"
BRAND_NAME = "AutoAIUY"

NOTIFICATION_SUBJECT = "New inquiry from {name}"
ACKNOWLEDGEMENT_SUBJECT = "We received your message - AutoAIUY"

# Headers attached to every response of the contact endpoint
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}


class Settings(BaseModel):
    """Runtime settings, resolved once at startup"""
    app_name: str = "Contact Relay API"
    description: str = "Relays website contact form submissions by email"
    version: str = "1.0.0"
    environment: str = "production"
    resend_api_key: Optional[str] = None
    dispatch_mode: Literal["single", "dual"] = "single"
    api_v1_str: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


def load_settings() -> Settings:
    return Settings(
        app_name=os.getenv('APP_NAME', 'Contact Relay API'),
        environment=os.getenv('ENV', 'production'),
        resend_api_key=os.getenv('RESEND_API_KEY') or None,
        dispatch_mode=os.getenv('CONTACT_DISPATCH_MODE', 'single').lower(),
        api_v1_str=os.getenv('API_V1_STR', '/api/v1'),
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', '8000')),
        log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()

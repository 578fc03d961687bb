# taskflow/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "TaskFlow API"
    env: str = os.getenv("ENV", "dev")

    # CORS origins for frontend (cookies are sent cross-origin, so origins must be explicit)
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Token signing key; read once at startup, never rotated while the process runs
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")

    # Auth cookie
    cookie_name: str = "token"
    cookie_secure: bool = os.getenv("COOKIE_SECURE", "false").lower() in ("true", "1", "yes")

    def cors_origins(self) -> list[str]:
        """Configured origins plus FRONTEND_URL, without duplicates."""
        origins = list(self.CORS_ORIGINS)
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins

settings = Settings()  # Instantiate configuration

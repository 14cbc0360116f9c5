"""
Freight LR Document Service Configuration
Compatible with Pydantic v2 and pydantic-settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import json


class Settings(BaseSettings):
    """Application settings for the LR document service"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore"
    )

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Freight LR Document Service"
    VERSION: str = "1.0.0"

    # Development/Debug Configuration
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert ALLOWED_ORIGINS to a list (JSON array or comma-separated)"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, str):
                origins = [o.strip() for o in origins.split(",") if o.strip()]
        except ValueError:
            origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

        # Deduplicate while preserving order
        seen = set()
        deduped: List[str] = []
        for o in origins:
            if o and o not in seen:
                seen.add(o)
                deduped.append(o)
        return deduped

    # LR rendering
    DEFAULT_TEMPLATE_CODE: str = "standard"
    PDF_AUTHOR: str = "Freight LR Document Service"
    PDF_CREATOR: str = "LR Rendering Engine"

    # Logo fetching happens in the API layer, never inside the renderer
    ENABLE_LOGO_FETCH: bool = True
    LOGO_FETCH_TIMEOUT_SECONDS: float = 5.0
    MAX_LOGO_BYTES: int = 2 * 1024 * 1024


settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # public anon key
    supabase_service_role_key: Optional[str] = None  # Required for admin counts and seeding

    # Direct Postgres connection, only used by the schema provisioner
    database_url: Optional[str] = None

    # Auth cookie
    auth_cookie_name: str = "token"
    auth_cookie_max_age: int = 7 * 24 * 60 * 60
    password_reset_redirect_url: str = "http://localhost:5173/reset-password"

    # API client
    api_base_url: str = "http://localhost:3001"

    # App
    app_name: str = "littlebridge-api"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_demo_mode(self) -> bool:
        """True when the Supabase URL or public key is missing; static demo data is served instead."""
        return not self.supabase_url.strip() or not self.supabase_key.strip()

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()

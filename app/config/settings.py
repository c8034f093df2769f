from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for admin auth calls (create user, revoke session)

    # Supabase tables and storage
    users_table: str = "user_profiles"
    files_table: str = "files"
    storage_bucket: str = "files"

    # AWS S3 (optional; Supabase Storage is used when not fully configured)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # Session
    session_cookie_name: str = "supabase-session"
    sign_in_path: str = "/sign-in"
    avatar_placeholder_url: str = (
        "https://e7.pngegg.com/pngimages/799/987/png-clipart-computer-icons-avatar-icon-design-"
        "avatar-heroes-computer-wallpaper-thumbnail.png"
    )

    # Files
    page_size: int = 15
    max_upload_bytes: int = 50 * 1024 * 1024
    storage_quota_bytes: int = 2 * 1024 * 1024 * 1024

    # App
    app_name: str = "storeit-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    otp_rate_limit: str = "5/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()

from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application Information
    app_name: str = Field(default="ThinkCyber CMS")
    app_description: str = Field(default="Content management API for topics and site content")
    app_version: str = Field(default="1.0.0")
    app_url: str = Field(default="http://localhost:8000")
    debug: bool = Field(default=True)
    production: bool = Field(default=False)
    timezone: str = Field(default="UTC")

    # Database Configuration
    database_url: Optional[str] = Field(default=None)
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=5432)
    db_database: str = Field(default="cms")
    db_username: str = Field(default="postgres")
    db_password: str = Field(default="postgres")

    # Security Settings
    cors_allowed_origins: List[str] = Field(default=["*"])

    # JWT Configuration
    jwt_secret: str = Field(default="your-secret-key-change-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_user_expiration: int = Field(default=7)
    jwt_issuer: str = Field(default="ThinkCyber CMS")

    # OTP
    otp_length: int = Field(default=6)
    otp_expire_minutes: int = Field(default=10)
    otp_cleanup_enabled: bool = Field(default=True)

    # Email (SMTP)
    mail_host: str = Field(default="smtp.gmail.com")
    mail_port: int = Field(default=587)
    mail_username: str = Field(default="")
    mail_password: str = Field(default="")
    mail_from_address: str = Field(default="no-reply@example.com")
    mail_from_name: str = Field(default="ThinkCyber")
    mail_starttls: bool = Field(default=True)
    mail_ssl_tls: bool = Field(default=False)

    # File Uploads
    upload_dir: str = Field(default="uploads")
    max_image_size_mb: int = Field(default=10)
    max_video_size_mb: int = Field(default=500)
    max_document_size_mb: int = Field(default=50)
    max_thumbnail_size_mb: int = Field(default=5)
    max_bulk_files: int = Field(default=10)

    # Pagination
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)

    # Redis
    redis_url: str = Field(default="redis://localhost:6379")
    redis_rate_limit: str = Field(default="200/minute")
    rate_limit_enabled: bool = Field(default=True)

    # ============================
    # Generic comma-separated parser
    # ============================
    @staticmethod
    def _parse_csv(value, default):
        if isinstance(value, str):
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default
        if isinstance(value, list):
            return value
        return default

    @field_validator("cors_allowed_origins", mode="before")
    def validate_cors(cls, v):
        return cls._parse_csv(v, ["*"])

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return "postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}".format(
            user=self.db_username,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_settings():
    try:
        settings = Settings()
        print("✅ Settings loaded successfully!")
        return settings
    except ValidationError as e:
        print("❌ Validation Error:", e)
        raise


settings = load_settings()

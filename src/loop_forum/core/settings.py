"""Application settings and configuration.

This module defines all configuration options for the Loop forum API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Loop Forum", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./loop.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    create_tables_on_startup: bool = Field(default=True, alias="CREATE_TABLES_ON_STARTUP")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Content rules
    min_title_length: int = Field(default=5, alias="MIN_TITLE_LENGTH")
    min_post_content_length: int = Field(default=20, alias="MIN_POST_CONTENT_LENGTH")
    min_reply_length: int = Field(default=2, alias="MIN_REPLY_LENGTH")
    min_username_length: int = Field(default=3, alias="MIN_USERNAME_LENGTH")
    min_password_length: int = Field(default=6, alias="MIN_PASSWORD_LENGTH")

    # Categorization and threading
    default_category_slug: str = Field(default="general", alias="DEFAULT_CATEGORY_SLUG")
    max_reply_depth: int = Field(default=3, alias="MAX_REPLY_DEPTH")
    # Hard limit on stored nesting; deeper threads are shown flattened.
    max_thread_depth: int = Field(default=64, ge=1, alias="MAX_THREAD_DEPTH")

    # Feed sizes
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")
    top_posts_per_category: int = Field(default=3, alias="TOP_POSTS_PER_CATEGORY")
    following_feed_limit: int = Field(default=6, alias="FOLLOWING_FEED_LIMIT")
    following_feed_expanded_limit: int = Field(
        default=20,
        alias="FOLLOWING_FEED_EXPANDED_LIMIT",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()  # type: ignore[call-arg]

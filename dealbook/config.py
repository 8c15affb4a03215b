from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "DEALBOOK_"}

    # Database
    database_url: str = "sqlite+aiosqlite:///./dealbook.db"

    # Redis (call-site memoization of batch projections)
    redis_url: str = "redis://localhost:6379/0"
    cache_enabled: bool = True
    projection_cache_ttl_seconds: int = 86400

    # Projection defaults
    default_horizon_years: int = 30

    # Serve the built-in marketing deals when the database has no matching record
    static_deals_enabled: bool = True

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./data/gps_tracking.sqlite3"
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60
    bcrypt_rounds: int = 10
    upload_dir: str = "./uploads"
    uploads_url_prefix: str = "/uploads"
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 1000
    log_level: str = "INFO"
    docs_url: str = "/api-docs"

    # False keeps the legacy behaviour: an update without a new file clears the reference
    preserve_documents_on_update: bool = False
    # False hides raw exception text from 500 responses
    expose_error_details: bool = True

    seed_demo_data: bool = True
    seed_admin_username: str = "admin"
    seed_admin_password: str = ""  # empty = no admin account seeded

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()

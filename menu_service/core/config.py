from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "menu-service"
    environment: str = "local"
    log_level: str = "INFO"
    add_item_rate_limit: str = "20/minute"
    ready_check_timeout: float = 1.5
    sentry_dsn: str | None = None
    sentry_environment: str | None = None

    # Firebase settings
    firebase_project_id: str | None = None
    firebase_credentials_path: str | None = None

    menu_collection: str = "menu"
    menu_store_backend: Literal["firestore", "memory"] = "firestore"


settings = Settings()

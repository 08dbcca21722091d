# app/config.py
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "postgresql://localhost:5432/league"
    env: Literal["dev", "stage", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"
    access_log: bool = True
    sql_echo: bool = False

    # Manager statistics engine
    stats_cache_enabled: bool = True
    roster_page_size: int = 10  # cards per page in the managers list

    # Admin console: comma-separated user ids that resolve to the admin role
    admin_user_ids: str = ""

    @property
    def admin_ids(self) -> frozenset[str]:
        return frozenset(uid.strip() for uid in self.admin_user_ids.split(",") if uid.strip())

    @property
    def is_dev(self) -> bool:
        return self.env == "dev" or self.debug is True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()

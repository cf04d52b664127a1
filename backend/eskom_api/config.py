from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Upstream eskom-calendar feeds
    outage_feed_url: str = Field(
        default="https://github.com/beyarkay/eskom-calendar/releases/download/latest/machine_friendly.csv"
    )
    schedule_base_url: str = Field(
        default="https://raw.githubusercontent.com/beyarkay/eskom-calendar/main/generated"
    )

    # Upstream HTTP client
    http_timeout_seconds: float = Field(default=15.0)
    user_agent: str = Field(default="EskomCalendarAPI/0.0.1")

    # Version label of the pinned route namespace
    api_version: str = Field(default="v0.0.1")

    # Raise on the first batch with malformed CSV rows instead of skipping them
    strict_rows: bool = Field(default=False)

    log_level: str = Field(default="INFO")

    # CORS
    cors_origins: str = Field(default="*")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from collector.app.catalog import MetricCatalog


class Settings(BaseSettings):
    """Collector configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FC_COLLECTOR_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "FC Realtime Collector"
    debug: bool = False

    # Platform endpoint and credentials
    base_url: str = ""
    user: str = ""
    password: str = ""
    site_id: str = "1"

    # Host page selection
    host_limit: int = Field(100, ge=1)
    host_offset: int = Field(0, ge=0)

    metric_catalog: MetricCatalog = MetricCatalog.HOST

    # HTTP behaviour
    verify_tls: bool = True
    request_timeout_seconds: float = Field(10.0, gt=0)
    max_hosts_per_request: int = Field(500, ge=0)  # 0 disables the bound

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, value: str | None) -> str:
        if value is None:
            return ""
        return str(value).strip().rstrip("/")

    @field_validator("site_id", mode="before")
    @classmethod
    def _normalize_site_id(cls, value: str | int | None) -> str:
        if value is None:
            return "1"
        token = str(value).strip().strip("/")
        return token or "1"

    @field_validator("metric_catalog", mode="before")
    @classmethod
    def _parse_catalog(cls, value: MetricCatalog | str | None) -> MetricCatalog | str:
        if value is None or value == "":
            return MetricCatalog.HOST
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def missing_credentials(self) -> list[str]:
        """Names of the connection settings that are still empty."""
        return [name for name in ("base_url", "user", "password") if not getattr(self, name)]

    def host_batch_limit(self) -> int | None:
        return self.max_hosts_per_request or None


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

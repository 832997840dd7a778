"""应用配置管理."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置（环境变量）."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 阅读器服务端配置
    reader_url: str = ""
    sync_path: str = "/api/feeds/sync-all"
    articles_path: str = "/api/articles"
    request_timeout_seconds: float = 30.0
    sync_stream_read_timeout_seconds: float | None = None

    # 同步配置
    sync_interval_minutes: int = 15
    sync_on_startup: bool = True

    # 应用配置
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """获取应用配置（带缓存）."""
    return Settings()

"""
全局配置模块：通过 pydantic-settings 读取环境变量 / .env
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用全局配置，进程启动时从环境变量加载"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Redis ──
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None
    REDIS_DB: int = 0
    REDIS_MAX_CONNECTIONS: int = 10
    REDIS_SOCKET_TIMEOUT: int = 5  # 秒

    # ── Todo ──
    TODO_HASH_KEY: str = "todoList"  # 全部 Todo 存放在同一个 Hash 下

    # ── 应用 ──
    ENV: str = "development"  # development | production
    APP_NAME: str = "todo-api"
    APP_PORT: int = 8000

    @field_validator("REDIS_PASSWORD", mode="before")
    @classmethod
    def _empty_password_is_none(cls, v: object) -> object:
        """REDIS_PASSWORD= 留空时视为未设置"""
        if v == "":
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """单例获取配置（带缓存）"""
    return Settings()

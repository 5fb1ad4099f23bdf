"""
Pytest fixtures：内存版 Redis + 确定性 id 生成器 + TestClient
"""

import itertools
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from todo_api.config import Settings
from todo_api.main import create_app

# =============================================================================
# Redis 替身
# =============================================================================


class FakeRedis:
    """只实现本项目用到的 Hash 命令，并记录每次调用"""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.calls: list[tuple] = []
        self.closed = False
        self.ping_error: Exception | None = None

    async def ping(self) -> bool:
        if self.ping_error is not None:
            raise self.ping_error
        return True

    async def hset(self, name: str, key: str, value: str) -> int:
        self.calls.append(("hset", name, key, value))
        bucket = self.hashes.setdefault(name, {})
        added = key not in bucket
        bucket[key] = value
        return int(added)

    async def hgetall(self, name: str) -> dict[str, str]:
        self.calls.append(("hgetall", name))
        return dict(self.hashes.get(name, {}))

    async def hdel(self, name: str, *keys: str) -> int:
        self.calls.append(("hdel", name, *keys))
        bucket = self.hashes.get(name, {})
        return sum(1 for key in keys if bucket.pop(key, None) is not None)

    async def aclose(self) -> None:
        self.closed = True


class BrokenRedis(FakeRedis):
    """能通过启动预检，但所有数据命令都连接失败"""

    async def hset(self, name: str, key: str, value: str) -> int:
        raise RedisConnectionError("connection refused")

    async def hgetall(self, name: str) -> dict[str, str]:
        raise RedisConnectionError("connection refused")

    async def hdel(self, name: str, *keys: str) -> int:
        raise RedisConnectionError("connection refused")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """测试配置，不读取 .env"""
    return Settings(_env_file=None, TODO_HASH_KEY="todoList:test")


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def id_factory():
    """确定性 id 序列：todo-1, todo-2, ..."""
    counter = itertools.count(1)
    return lambda: f"todo-{next(counter)}"


@pytest.fixture
def app(settings: Settings, fake_redis: FakeRedis, id_factory) -> FastAPI:
    return create_app(settings=settings, redis=fake_redis, id_factory=id_factory)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """进入上下文以触发 lifespan"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def broken_redis() -> BrokenRedis:
    return BrokenRedis()

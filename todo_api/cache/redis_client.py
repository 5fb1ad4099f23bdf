"""
Redis 客户端：连接池构建 + Key 统一管理 + FastAPI 依赖注入

客户端不在 import 时创建，由应用 lifespan 按 Settings 显式构建，
挂在 app.state.redis 上，关闭时统一释放。
"""

import redis.asyncio as aioredis
from fastapi import Request

from todo_api.config import Settings


class RedisKeys:
    """
    Redis Key 统一管理，避免散弹式硬编码
    """

    # ── Todo 列表（Redis Hash：id -> text） ──
    @staticmethod
    def todo_list(settings: Settings) -> str:
        """全局 Todo Hash Key，无 TTL"""
        return settings.TODO_HASH_KEY


def create_redis_client(settings: Settings) -> aioredis.Redis:
    """按配置构建带连接池的异步 Redis 客户端"""
    pool = aioredis.ConnectionPool(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        password=settings.REDIS_PASSWORD,
        db=settings.REDIS_DB,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
    )
    return aioredis.Redis(connection_pool=pool)


async def get_redis(request: Request) -> aioredis.Redis:
    """FastAPI 依赖注入：获取 Redis 客户端"""
    return request.app.state.redis

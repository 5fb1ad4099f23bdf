"""
Todo Redis 存储层

全部 Todo 存放在同一个 Redis Hash 中（field = id，value = text），无 TTL。
每个操作只发起一次 Redis 调用；Redis 异常不做降级，直接抛给调用方。
"""

import uuid
from collections.abc import Callable

import redis.asyncio as aioredis
import structlog

from todo_api.observability.metrics import TODO_OPERATION_TOTAL
from todo_api.todo.schemas import TodoItem

log = structlog.get_logger()

IdFactory = Callable[[], str]


def new_todo_id() -> str:
    """默认 id 生成器：UUID v4"""
    return str(uuid.uuid4())


class TodoStore:
    """全局 Todo 列表的 Redis CRUD"""

    def __init__(
        self,
        redis: aioredis.Redis,
        hash_key: str,
        id_factory: IdFactory = new_todo_id,
    ) -> None:
        self._redis = redis
        self._hash_key = hash_key
        self._id_factory = id_factory

    @property
    def hash_key(self) -> str:
        return self._hash_key

    async def create(self, text: str) -> TodoItem:
        """生成新 id 并写入"""
        todo_id = self._id_factory()
        await self._redis.hset(self._hash_key, todo_id, text)
        TODO_OPERATION_TOTAL.labels(operation="create").inc()
        log.info("Todo 已创建", todo_id=todo_id)
        return TodoItem(id=todo_id, text=text)

    async def read_all(self) -> dict[str, str]:
        """读取整个 Hash，原样返回"""
        todos = await self._redis.hgetall(self._hash_key)
        TODO_OPERATION_TOTAL.labels(operation="read").inc()
        log.debug("Todo 列表已读取", count=len(todos))
        return todos

    async def update(self, todo_id: str, text: str) -> TodoItem:
        """覆盖写入；id 不存在时等同于新建（不做存在性检查）"""
        await self._redis.hset(self._hash_key, todo_id, text)
        TODO_OPERATION_TOTAL.labels(operation="update").inc()
        log.info("Todo 已更新", todo_id=todo_id)
        return TodoItem(id=todo_id, text=text)

    async def delete(self, todo_id: str) -> None:
        """删除条目，id 不存在时为空操作"""
        removed = await self._redis.hdel(self._hash_key, todo_id)
        TODO_OPERATION_TOTAL.labels(operation="delete").inc()
        log.info("Todo 已删除", todo_id=todo_id, removed=bool(removed))

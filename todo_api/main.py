"""
FastAPI 应用主入口

create_app() 显式接收配置 / Redis 客户端 / id 生成器，测试时可全部替换；
模块级 app 供 uvicorn 直接加载。
"""

from contextlib import asynccontextmanager

import redis.asyncio as aioredis
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from redis.exceptions import RedisError

from todo_api.api.cors import CORSMiddleware
from todo_api.api.health import router as health_router
from todo_api.api.todos import router as todos_router
from todo_api.cache.redis_client import RedisKeys, create_redis_client
from todo_api.config import Settings, get_settings
from todo_api.observability.context import get_trace_id
from todo_api.observability.logging_config import setup_logging
from todo_api.observability.metrics import ERROR_TOTAL
from todo_api.observability.metrics_middleware import MetricsMiddleware
from todo_api.observability.request_logger import RequestLoggerMiddleware
from todo_api.todo.errors import ErrorCodes, TodoApiError
from todo_api.todo.store import IdFactory, TodoStore, new_todo_id

log = structlog.get_logger()


async def todo_api_error_handler(request: Request, exc: TodoApiError) -> JSONResponse:
    """校验类错误统一渲染为 JSON，状态码取自异常，附带 trace_id 便于排查"""
    ERROR_TOTAL.labels(error_type=exc.code).inc()
    log.warning("请求校验失败", path=request.url.path, **exc.to_dict())
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.to_dict(), "trace_id": get_trace_id()},
    )


async def redis_error_handler(request: Request, exc: RedisError) -> JSONResponse:
    """
    Redis 异常不重试、不降级，直接返回 500。

    在路由内层处理，响应仍经过中间件，CORS 头和 trace 头不会丢失。
    """
    ERROR_TOTAL.labels(error_type=ErrorCodes.STORE_ERROR).inc()
    log.error("Redis 调用失败", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "code": ErrorCodes.STORE_ERROR,
            "error": "Todo store unavailable.",
            "trace_id": get_trace_id(),
        },
    )


def create_app(
    settings: Settings | None = None,
    redis: aioredis.Redis | None = None,
    id_factory: IdFactory = new_todo_id,
) -> FastAPI:
    """
    构建应用。

    Args:
        settings: 配置，缺省读取环境变量
        redis: 外部传入的 Redis 客户端；传入时应用不负责关闭它
        id_factory: Todo id 生成器，缺省为 UUID v4
    """
    settings = settings or get_settings()
    setup_logging(env=settings.ENV)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        """启动时构建并预检 Redis，关闭时释放自己创建的连接池"""
        log.info("应用启动", env=settings.ENV, app=settings.APP_NAME)

        owns_client = redis is None
        client = redis if redis is not None else create_redis_client(settings)

        # Fail Fast：Redis 不可用时拒绝启动
        await client.ping()
        log.info("Redis 连接正常", host=settings.REDIS_HOST, port=settings.REDIS_PORT)

        application.state.redis = client
        application.state.todo_store = TodoStore(
            client, RedisKeys.todo_list(settings), id_factory=id_factory
        )

        yield

        if owns_client:
            await client.aclose()
        log.info("应用关闭，资源已释放")

    application = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

    # ── 中间件（后注册的在外层） ──
    application.add_middleware(CORSMiddleware)
    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestLoggerMiddleware)

    application.add_exception_handler(TodoApiError, todo_api_error_handler)
    application.add_exception_handler(RedisError, redis_error_handler)

    application.mount("/metrics", make_asgi_app())

    application.include_router(health_router)
    application.include_router(todos_router)

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("todo_api.main:app", host="0.0.0.0", port=get_settings().APP_PORT)

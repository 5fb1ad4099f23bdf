"""
Todo CRUD 接口

端点（均为 POST，与前端约定保持一致）：
- POST /create — {message}      → {<new-id>: message}
- POST /read   — 无 body        → {id: text, ...}
- POST /update — {message, id}  → {id: message}
- POST /delete — {id}           → 空 body

校验在访问 Redis 之前完成；Redis 异常由 main 中的处理器统一转为 500。
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from todo_api.todo.schemas import CreateRequest, DeleteRequest, UpdateRequest
from todo_api.todo.store import TodoStore
from todo_api.todo.validation import parse_request

router = APIRouter(tags=["Todo"])


async def get_todo_store(request: Request) -> TodoStore:
    """FastAPI 依赖注入：获取 lifespan 中构建的 TodoStore"""
    return request.app.state.todo_store


async def _create_body(request: Request) -> CreateRequest:
    return parse_request(CreateRequest, await request.body())


async def _update_body(request: Request) -> UpdateRequest:
    return parse_request(UpdateRequest, await request.body())


async def _delete_body(request: Request) -> DeleteRequest:
    return parse_request(DeleteRequest, await request.body())


@router.post("/create")
async def create_todo(
    body: CreateRequest = Depends(_create_body),
    store: TodoStore = Depends(get_todo_store),
) -> dict[str, str]:
    item = await store.create(body.message)
    return item.as_mapping()


@router.post("/read")
async def read_todos(store: TodoStore = Depends(get_todo_store)) -> dict[str, str]:
    return await store.read_all()


@router.post("/update")
async def update_todo(
    body: UpdateRequest = Depends(_update_body),
    store: TodoStore = Depends(get_todo_store),
) -> dict[str, str]:
    """id 不存在时同样写入（upsert），不返回 404"""
    item = await store.update(body.id, body.message)
    return item.as_mapping()


@router.post("/delete", response_class=Response)
async def delete_todo(
    body: DeleteRequest = Depends(_delete_body),
    store: TodoStore = Depends(get_todo_store),
) -> Response:
    await store.delete(body.id)
    return Response(status_code=200)

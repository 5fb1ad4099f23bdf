"""
Todo 模块：全局任务列表管理

提供 Redis Hash 持久化的 TodoStore、TodoItem schema 以及请求体校验，
供 api.todos 路由使用。
"""

from todo_api.todo.errors import TodoApiError
from todo_api.todo.schemas import TodoItem
from todo_api.todo.store import TodoStore, new_todo_id

__all__ = ["TodoApiError", "TodoItem", "TodoStore", "new_todo_id"]

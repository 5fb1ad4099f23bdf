"""
Todo 数据模型
"""

from pydantic import BaseModel


class TodoItem(BaseModel):
    """单个 Todo 条目：id 由服务端生成，text 为用户输入"""

    id: str
    text: str

    def as_mapping(self) -> dict[str, str]:
        """接口返回格式：{id: text}"""
        return {self.id: self.text}


# ── 请求模型（字段顺序即缺失字段的报错顺序） ──

class CreateRequest(BaseModel):
    message: str


class UpdateRequest(BaseModel):
    message: str
    id: str


class DeleteRequest(BaseModel):
    id: str

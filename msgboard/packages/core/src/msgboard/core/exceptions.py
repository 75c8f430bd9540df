"""Store 异常体系

调用方（HTTP 层等）根据异常类型区分校验失败与记录不存在。
"""


class StoreError(Exception):
    """Store 基础异常"""


class ValidationError(StoreError):
    """字段校验失败（必填字段为空、长度越界等）"""

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Args:
            message: 错误描述
            field: 校验失败的字段名（可选）
        """
        super().__init__(message)
        self.field = field


class NotFoundError(StoreError):
    """指定 id 的消息不存在"""

    def __init__(self, message_id: int) -> None:
        super().__init__(f"Message not found with id: {message_id}")
        self.message_id = message_id


class BookNotFoundError(StoreError):
    """指定 id 的图书不存在"""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book not found with id: {book_id}")
        self.book_id = book_id

# utils/errors.py


class AppError(Exception):
    """Lỗi nghiệp vụ gốc của ứng dụng."""


class ValidationError(AppError, ValueError):
    """Dữ liệu nhập sai, chưa ghi gì xuống DB."""

    def __init__(self, message: str, messages=None):
        super().__init__(message)
        self.messages = list(messages or [message])


class NotAuthenticated(AppError):
    pass


class PersistenceFailure(AppError):
    """DB từ chối hoặc không kết nối được; session đã rollback."""

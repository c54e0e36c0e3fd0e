"""Business error kinds raised by the member services."""

from __future__ import annotations

from enum import Enum


class ExceptionCode(Enum):
    MEMBER_EXISTS = (409, "Member already exists")
    MEMBER_NOT_FOUND = (404, "Member not found")
    INVALID_TOKEN = (401, "Invalid or expired token")
    INVALID_CREDENTIALS = (401, "Invalid email or password")
    NO_SUCH_ALGORITHM = (500, "No strong random source available")

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message


class BusinessLogicError(Exception):
    """A domain rule violation; callers branch on ``code``."""

    def __init__(self, code: ExceptionCode, detail: str | None = None):
        super().__init__(detail or code.message)
        self.code = code
        self.message = detail or code.message

    @property
    def status(self) -> int:
        return self.code.status

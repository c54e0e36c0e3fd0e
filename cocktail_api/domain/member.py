"""Enumerations describing a member account and e-mail verification outcomes."""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    # created without a local password; role not granted yet
    PENDING = "PENDING"


class LoginType(str, Enum):
    NATIVE = "NATIVE"
    FEDERATED = "FEDERATED"


class EmailVerificationResult(str, Enum):
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
    CODE_NOT_FOUND = "CODE_NOT_FOUND"

    @classmethod
    def of(cls, matched: bool) -> "EmailVerificationResult":
        return cls.MATCH if matched else cls.MISMATCH

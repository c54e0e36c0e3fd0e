"""SQLAlchemy models for member accounts."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    func,
)

from cocktail_api.domain.member import LoginType, Role

from .session import Base


class Member(Base):
    __tablename__ = "members"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # null for federated logins
    password_hash = Column(Text, nullable=True)
    name = Column(String(100), nullable=True)
    birth = Column(Date, nullable=True)
    phone = Column(String(32), nullable=True)
    gender = Column(String(16), nullable=True)
    role = Column(Enum(Role, name="member_role"), nullable=True)
    login_type = Column(Enum(LoginType, name="member_login_type"), nullable=True)
    taste = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Member id={self.id} email={self.email!r} role={self.role}>"

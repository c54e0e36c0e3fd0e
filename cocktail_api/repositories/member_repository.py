"""Member persistence bound to a single SQLAlchemy session."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from cocktail_api.db.models import Member


class MemberRepository:
    """
    CRUD helpers over ``members``.

    The repository never commits; the caller's unit of work (``session_scope``)
    decides whether the changes are applied.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> Optional[Member]:
        stmt = select(Member).where(Member.email == email)
        return self.session.execute(stmt).scalar_one_or_none()

    def exists_by_email(self, email: str) -> bool:
        stmt = select(Member.id).where(Member.email == email).limit(1)
        return self.session.execute(stmt).first() is not None

    def save(self, member: Member) -> Member:
        self.session.add(member)
        self.session.flush()
        return member

    def delete(self, member: Member) -> None:
        self.session.delete(member)
        self.session.flush()

"""
Member registration, e-mail verification and token-bound account use cases.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Callable
import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cocktail_api.core.auth_code_store import AuthCodeStore
from cocktail_api.core.errors import BusinessLogicError, ExceptionCode
from cocktail_api.core.mailer import MailSender
from cocktail_api.core.security import hash_password, needs_rehash, verify_password
from cocktail_api.core.tokens import TokenService
from cocktail_api.db.models import Member
from cocktail_api.db.session import session_scope
from cocktail_api.domain.member import EmailVerificationResult, LoginType, Role
from cocktail_api.repositories.member_repository import MemberRepository
from cocktail_api.schemas import JoinRequest

logger = logging.getLogger(__name__)

AUTH_CODE_PREFIX = "AuthCode "
AUTH_CODE_LENGTH = 6
AUTH_MAIL_SUBJECT = "cocktail 이메일 인증 번호"


def normalize_email(email: str | None) -> str:
    return (email or "").strip()


def auth_code_key(email: str) -> str:
    return AUTH_CODE_PREFIX + email


@dataclass
class MemberService:
    """Handles verification codes, sign-up, login, withdrawal and taste updates."""

    code_store: AuthCodeStore
    mailer: MailSender
    tokens: TokenService
    session_factory: Callable[[], AbstractContextManager[Session]] = field(default=session_scope)

    # -------------------------------------- helpers --------------------------------------
    def _create_code(self) -> str:
        try:
            rng = secrets.SystemRandom()
            return "".join(str(rng.randrange(10)) for _ in range(AUTH_CODE_LENGTH))
        except NotImplementedError:
            logger.error("No OS randomness source available for verification codes")
            raise BusinessLogicError(ExceptionCode.NO_SUCH_ALGORITHM)

    def _check_duplicated_email(self, repo: MemberRepository, email: str) -> None:
        if repo.exists_by_email(email):
            logger.debug("Duplicate member email: %s", email)
            raise BusinessLogicError(ExceptionCode.MEMBER_EXISTS)

    def _require_member(self, repo: MemberRepository, email: str) -> Member:
        member = repo.find_by_email(email)
        if member is None:
            logger.debug("No member for email: %s", email)
            raise BusinessLogicError(ExceptionCode.MEMBER_NOT_FOUND, f"Member not found for email: {email}")
        return member

    def _email_from_token(self, token: str) -> str:
        if not self.tokens.validate(token):
            raise BusinessLogicError(ExceptionCode.INVALID_TOKEN)
        return self.tokens.extract_email(token)

    # -------------------------------------- verification --------------------------------------
    def send_verification_email(self, to_email: str) -> None:
        to_email = normalize_email(to_email)
        with self.session_factory() as session:
            self._check_duplicated_email(MemberRepository(session), to_email)
        code = self._create_code()
        self.mailer.send(to_email, AUTH_MAIL_SUBJECT, code)
        self.code_store.save(auth_code_key(to_email), code)
        logger.info("Verification code issued for %s", to_email)

    def verify_code(self, email: str, code: str) -> EmailVerificationResult:
        stored = self.code_store.get(auth_code_key(normalize_email(email)))
        if stored is None:
            return EmailVerificationResult.CODE_NOT_FOUND
        return EmailVerificationResult.of(secrets.compare_digest(stored.encode(), (code or "").encode()))

    # -------------------------------------- registration --------------------------------------
    def register_member(self, request: JoinRequest) -> Member:
        email = normalize_email(request.email)
        member = Member(
            email=email,
            name=request.name,
            birth=request.birth,
            phone=request.phone,
            gender=request.gender,
        )
        if request.password:
            member.password_hash = hash_password(request.password)
            member.role = Role.USER
            member.login_type = LoginType.NATIVE
        else:
            member.role = Role.PENDING
            member.login_type = LoginType.FEDERATED

        with self.session_factory() as session:
            repo = MemberRepository(session)
            self._check_duplicated_email(repo, email)
            try:
                repo.save(member)
            except IntegrityError:
                # lost a race with a concurrent join for the same address
                logger.debug("Unique constraint hit for member email: %s", email)
                raise BusinessLogicError(ExceptionCode.MEMBER_EXISTS)
        logger.info("Registered member %s (%s)", member.email, member.login_type.value)
        return member

    # -------------------------------------- session --------------------------------------
    def login(self, email: str, password: str) -> str:
        with self.session_factory() as session:
            repo = MemberRepository(session)
            member = repo.find_by_email(normalize_email(email))
            if (
                member is None
                or member.login_type != LoginType.NATIVE
                or not verify_password(password, member.password_hash)
            ):
                raise BusinessLogicError(ExceptionCode.INVALID_CREDENTIALS)
            if needs_rehash(member.password_hash):
                member.password_hash = hash_password(password)
                repo.save(member)
            role = member.role.value if member.role else None
            return self.tokens.issue(member.email, role)

    def lookup_by_token(self, token: str) -> Member:
        email = self._email_from_token(token)
        with self.session_factory() as session:
            return self._require_member(MemberRepository(session), email)

    def withdraw(self, token: str) -> None:
        email = self._email_from_token(token)
        with self.session_factory() as session:
            repo = MemberRepository(session)
            repo.delete(self._require_member(repo, email))
        logger.info("Member %s withdrew", email)

    def update_taste(self, token: str, taste: str) -> Member:
        email = self._email_from_token(token)
        with self.session_factory() as session:
            repo = MemberRepository(session)
            member = self._require_member(repo, email)
            member.taste = taste
            repo.save(member)
        return member

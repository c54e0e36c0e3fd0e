from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the package importable when running from a plain checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cocktail_api.core import config as core_config  # noqa: E402
from cocktail_api.core.auth_code_store import AuthCodeStore  # noqa: E402
from cocktail_api.core.tokens import TokenService  # noqa: E402
from cocktail_api.db import create_tables  # noqa: E402
from cocktail_api.db import session as db_session  # noqa: E402
from cocktail_api.services.member_service import MemberService  # noqa: E402

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"


class RecordingMailer:
    """Stands in for MailSender and keeps every message it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def send(self, to_address: str, subject: str, body: str) -> bool:
        self.sent.append((to_address, subject, body))
        return True

    def last_body_for(self, address: str) -> str:
        for to, _, body in reversed(self.sent):
            if to == address:
                return body
        raise AssertionError(f"no mail sent to {address}")


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Temporary SQLite database plus fresh settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_SECRET)
    monkeypatch.setenv("AUTH_CODE_EXPIRATION_MILLIS", "300000")
    for key in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM"):
        monkeypatch.delenv(key, raising=False)
    _reset_caches()

    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    engine = db_session.get_engine()
    create_tables.drop_all()
    engine.dispose()
    _reset_caches()


@pytest.fixture()
def mailer():
    return RecordingMailer()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def code_store(clock):
    return AuthCodeStore(ttl_seconds=300, clock=clock)


@pytest.fixture()
def tokens():
    return TokenService(TEST_SECRET, "HS256", 3600)


@pytest.fixture()
def service(db_env, code_store, mailer, tokens):
    return MemberService(code_store=code_store, mailer=mailer, tokens=tokens)

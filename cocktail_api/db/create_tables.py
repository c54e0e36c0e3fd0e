"""Create or drop the member schema; run as a module to bootstrap a database."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine())


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())


if __name__ == "__main__":
    from cocktail_api.core.config import configure_logging

    configure_logging()
    try:
        create_all()
        logger.info("Database tables created at %s", get_engine().url.render_as_string(hide_password=True))
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc

"""ASGI entry point: ``uvicorn cocktail_api.main:app`` or ``python -m cocktail_api.main``."""
import uvicorn

from cocktail_api.app import create_app
from cocktail_api.core.config import get_settings

app = create_app()

__all__ = ["app", "create_app"]


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)

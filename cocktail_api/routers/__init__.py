"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter included by ``cocktail_api.app.create_app``.
"""

# app/api/__init__.py
from app.api.routers import health, products

__all__ = ["health", "products"]

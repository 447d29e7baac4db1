# app/api/deps.py
from fastapi import Request

from app.repos.product_repo import ProductStore


def get_store(request: Request) -> ProductStore:
    return request.app.state.store

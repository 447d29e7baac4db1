# app/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.api.deps import get_store
from app.domain.schemas import Product
from app.repos.product_repo import ProductStore

router = APIRouter(prefix="/product", tags=["product"])


@router.post("", response_model=Product)
def save(product: Product, store: ProductStore = Depends(get_store)):
    return store.save(product)


@router.get("", response_model=List[Product])
def get_all_products(store: ProductStore = Depends(get_store)):
    return store.find_all()


@router.get("/{product_id}", response_model=Product)
def find_product(product_id: int, store: ProductStore = Depends(get_store)):
    #brak produktu -> ProductNotFound -> 404 (handler w main)
    return store.find_by_id(product_id)


@router.delete("/{product_id}", response_class=PlainTextResponse)
def remove(product_id: int, store: ProductStore = Depends(get_store)):
    return store.delete(product_id)

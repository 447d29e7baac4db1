# app/domain/errors.py


class StoreError(Exception):
    """Bazowy blad warstwy magazynu produktow."""


class ProductNotFound(StoreError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class StorageUnavailable(StoreError):
    """Magazyn nieosiagalny albo zwrocil dane, ktorych nie da sie odczytac."""

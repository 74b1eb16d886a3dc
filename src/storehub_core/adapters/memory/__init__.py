from .repository import InMemoryStoreRepository

__all__ = ["InMemoryStoreRepository"]

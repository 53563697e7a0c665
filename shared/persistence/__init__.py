from .repository import CrudRepository

__all__ = ["CrudRepository"]

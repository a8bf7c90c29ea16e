"""Infrastructure components shared by the routing core."""

from .cache import LRUCache

__all__ = ["LRUCache"]

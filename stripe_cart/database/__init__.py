# Storage modules

from .storage import KeyValueStorage, MemoryStorage, FileStorage
from .carts import CartStore, CART_KEY

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "CartStore",
    "CART_KEY",
]

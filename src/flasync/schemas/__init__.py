from .chains import ChainSnapshot, ChainStatus

__all__ = [
    "ChainSnapshot",
    "ChainStatus",
]

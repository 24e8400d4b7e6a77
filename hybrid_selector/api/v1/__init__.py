from hybrid_selector.api.v1 import selection

__all__ = [
    "selection",
]

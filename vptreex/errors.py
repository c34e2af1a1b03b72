from __future__ import annotations


class EmptyTreeError(LookupError, ValueError):
    """Raised when a nearest-neighbour query is issued against an empty tree."""

    def __init__(self, message: str = "Cannot query an empty tree.") -> None:
        super().__init__(message)


__all__ = ["EmptyTreeError"]

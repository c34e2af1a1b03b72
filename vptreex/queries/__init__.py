from .nearest import find_nearest, nearest_neighbor, neighbors

__all__ = ["find_nearest", "nearest_neighbor", "neighbors"]

from .random_index import RandomSelectionIndex

__all__ = ["RandomSelectionIndex"]

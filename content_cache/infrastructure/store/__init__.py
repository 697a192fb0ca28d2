from .memory_store import InMemoryContentStore

__all__ = ["InMemoryContentStore"]

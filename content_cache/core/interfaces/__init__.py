"""
Interfaces Module

Protocols for external collaborators, so implementations can be swapped at
startup and mocked in tests.
"""

from .store import ContentStore

__all__ = ["ContentStore"]

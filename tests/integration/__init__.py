"""
Integration tests.

Component interactions through the full application wiring:
- Multi-tier caching (local + shared) across service instances
- Degradation when the shared cache is unreachable

Redis is replaced by the dict-backed double from tests.test_fixtures.
"""

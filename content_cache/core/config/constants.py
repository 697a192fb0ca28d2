"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the content caching service.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers
- Type-safe enums for cache tiers and lookup outcomes
- Easy to update and track changes

Author: System Architect
Date: 2026-10-02
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Cache processing stages used as the ``stage`` field in log events.

    Format: {AREA}.{OPERATION}
    - AREA: CACHE (in-process tier), SHARED (Redis tier), INDEX, HTTP
    - OPERATION: short uppercase verb

    Examples:
        log_stage(logger, Stage.CACHE_GET, "Local cache hit", cache_key=key)
    """

    CACHE_GET = "CACHE.GET"
    CACHE_SET = "CACHE.SET"
    CACHE_DELETE = "CACHE.DELETE"
    CACHE_FLUSH = "CACHE.FLUSH"
    CACHE_SWEEP = "CACHE.SWEEP"
    CACHE_FETCH = "CACHE.FETCH"

    SHARED_CONNECT = "SHARED.CONNECT"
    SHARED_GET = "SHARED.GET"
    SHARED_SET = "SHARED.SET"
    SHARED_DELETE = "SHARED.DELETE"
    SHARED_KEYS = "SHARED.KEYS"

    INDEX_INIT = "INDEX.INIT"
    INDEX_PICK = "INDEX.PICK"

    HTTP_READ_THROUGH = "HTTP.READ_THROUGH"


# ============================================================================
# Cache Tiers
# ============================================================================


class CacheTier(str, Enum):
    """
    Cache tiers.

    LOCAL: In-process TTL cache (fastest, per worker)
    SHARED: Redis (cross-process, best-effort)
    """

    LOCAL = "local"
    SHARED = "shared"


class CacheOutcome(str, Enum):
    """
    Outcome tag returned by the best-effort shared cache.

    HIT: value found
    MISS: service reachable, key absent
    STORED: write accepted
    UNAVAILABLE: service failed or not connected; treat as absent
    """

    HIT = "hit"
    MISS = "miss"
    STORED = "stored"
    UNAVAILABLE = "unavailable"


# ============================================================================
# Cache Defaults
# ============================================================================

DEFAULT_CACHE_TTL = 300  # Default TTL for local entries (5 minutes)
DEFAULT_CHECK_PERIOD = 60  # Expiry sweep interval (1 minute)
DEFAULT_RESPONSE_TTL = 300  # Read-through middleware TTL (5 minutes)

# Absent parameter values serialize to this token in cache keys
CACHE_KEY_NULL_TOKEN = "null"
CACHE_KEY_PAIR_SEPARATOR = "&"

# TTLs used by the content routes
TTL_INDUSTRIES = 3600  # Industries rarely change
TTL_LEVELS = 3600
TTL_FLASHCARDS = 300

# ============================================================================
# Redis Key Prefixes
# ============================================================================

REDIS_KEY_HTTP_RESPONSE = "cache"

# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_REQUEST_ID = "X-Request-ID"
HEADER_CACHE_STATUS = "X-Cache"

"""
Admin API Response Models

Field names follow the public JSON contract (``hitRate`` is camelCase on the
wire), so aliases are used where Python naming differs.
"""

from pydantic import BaseModel, ConfigDict, Field


class CacheStats(BaseModel):
    """Local cache statistics."""

    model_config = ConfigDict(populate_by_name=True)

    keys: int = Field(..., ge=0, description="Entries currently held (including unswept expired ones)")
    hits: int = Field(..., ge=0, description="Lookups answered from cache")
    misses: int = Field(..., ge=0, description="Lookups that fell through to the store")
    hit_rate: float = Field(
        ..., ge=0.0, le=1.0, alias="hitRate", description="hits / (hits + misses), 0 when idle"
    )


class CacheStatsResponse(BaseModel):
    success: bool = True
    stats: CacheStats


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class InvalidationResponse(BaseModel):
    success: bool = True
    pattern: str
    deleted: int = Field(..., ge=0, description="Shared cache keys removed (0 if Redis unavailable)")


class IndexRebuildResponse(BaseModel):
    success: bool = True
    size: int = Field(..., ge=0, description="Entries loaded into the random index")

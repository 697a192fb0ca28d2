"""Infrastructure: cache tiers, random index, store adapters, metrics."""

import os
from dataclasses import dataclass
from typing import Any, Callable

TraceHook = Callable[[str, dict[str, Any]], None]


@dataclass(frozen=True)
class SearchConfig:
    """Bounds and hooks for the fire-time search.

    Args:
        max_iterations: Outer search iterations before giving up
        horizon_years: Years searched either side of the reference when
            the expression has no year field
        max_empty_months: Consecutive visited months without any valid day
            before giving up
        trace: Optional callable receiving (event, details) for each search
            step, for debugging schedules without touching logging config
    """
    max_iterations: int = 10_000
    horizon_years: int = 10
    max_empty_months: int = 10
    trace: TraceHook | None = None

    def __post_init__(self):
        """Validate search configuration."""
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        if self.horizon_years < 0:
            raise ValueError("horizon_years must be non-negative")

        if self.max_empty_months < 1:
            raise ValueError("max_empty_months must be at least 1")

        if self.trace is not None and not callable(self.trace):
            raise ValueError("trace must be callable")

    @classmethod
    def from_env(cls, prefix: str = "CRONTIDE_") -> "SearchConfig":
        """Load configuration from environment variables using mappings."""
        env_map = {
            "max_iterations": ("max_iterations", 10_000),
            "horizon_years": ("horizon_years", 10),
            "max_empty_months": ("max_empty_months", 10),
        }

        kwargs = {}
        for field, (env_name, default) in env_map.items():
            value = os.getenv(f"{prefix}{env_name.upper()}")
            kwargs[field] = int(value) if value is not None else default

        return cls(**kwargs)


DEFAULT_CONFIG = SearchConfig()

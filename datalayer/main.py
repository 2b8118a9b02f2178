"""Process-wide data layer registry: entry point for host applications."""

from __future__ import annotations

from datalayer.config import DataLayerSettings, configure_logging
from datalayer.domain.bus import DataLayer
from datalayer.domain.registry import BusRegistry

# ── Singletons (created at import time for simplicity) ────────────────
settings = DataLayerSettings.from_env()
configure_logging(settings)
registry = BusRegistry(default_name=settings.default_name)


def get_data_layer(name: str | None = None) -> DataLayer:
    """Return the process-wide bus for *name* (the configured default if omitted)."""
    return registry.get(name)

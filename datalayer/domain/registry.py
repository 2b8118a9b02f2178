"""Name-keyed registry of data layer instances."""

from __future__ import annotations

import logging
import threading

from datalayer.domain.bus import DataLayer
from datalayer.services.failures import FailureSink

logger = logging.getLogger(__name__)

DEFAULT_NAME = "dataLayer"


class BusRegistry:
    """Owns one DataLayer per distinct name.

    Construct one at startup and hand it to the modules that need to talk to
    each other; asking twice for the same name returns the same bus.
    """

    def __init__(
        self, default_name: str = DEFAULT_NAME, failure_sink: FailureSink | None = None
    ) -> None:
        if not default_name:
            raise ValueError("default data layer name must be a non-empty string")
        self.default_name = default_name
        self.failure_sink = failure_sink
        self._buses: dict[str, DataLayer] = {}
        self._lock = threading.Lock()

    def get(self, name: str | None = None) -> DataLayer:
        """Return the bus registered under *name*, creating it on first use."""
        key = self.default_name if name is None else name
        with self._lock:
            bus = self._buses.get(key)
            if bus is None:
                bus = DataLayer(key, failure_sink=self.failure_sink)
                self._buses[key] = bus
                logger.debug("Created data layer %r", key)
            return bus

    def names(self) -> list[str]:
        with self._lock:
            return list(self._buses)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._buses

    def __len__(self) -> int:
        with self._lock:
            return len(self._buses)

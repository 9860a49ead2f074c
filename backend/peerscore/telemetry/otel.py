from __future__ import annotations

from contextlib import contextmanager
import logging
import time
from typing import Any

logger = logging.getLogger("peerscore.telemetry.span")


@contextmanager
def start_span(name: str, attributes: dict[str, Any] | None = None):
    span = {"name": name, "attributes": attributes or {}}
    started = time.perf_counter()
    try:
        yield span
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug("span %s finished in %.3fms %s", name, elapsed_ms, span["attributes"])

"""Centralized process configuration for Folio (environment variables)."""

import os
import logging

log = logging.getLogger("folio.config")

# =========================
# Sources
# =========================
CONFIG_SOURCE: str = os.getenv("FOLIO_CONFIG", "config.yml")
DATA_ROOT: str = os.getenv("FOLIO_DATA_ROOT", ".")

# =========================
# HTTP
# =========================
RSS_FETCH_TIMEOUT: float = float(os.getenv("RSS_FETCH_TIMEOUT", "30"))
DATA_FETCH_TIMEOUT: float = float(os.getenv("DATA_FETCH_TIMEOUT", "20"))
USER_AGENT: str = os.getenv("FOLIO_USER_AGENT", "Folio/1.0 (+feed reader)")

# =========================
# Logging
# =========================
LOG_LEVEL: str = os.getenv("FOLIO_LOG_LEVEL", "INFO").upper()


def validate_timeouts() -> None:
    """Reject non-positive timeouts. Call at startup."""
    bad = []
    if RSS_FETCH_TIMEOUT <= 0:
        bad.append(f"RSS_FETCH_TIMEOUT={RSS_FETCH_TIMEOUT}")
    if DATA_FETCH_TIMEOUT <= 0:
        bad.append(f"DATA_FETCH_TIMEOUT={DATA_FETCH_TIMEOUT}")
    if bad:
        raise ValueError(f"Timeouts invalides (doivent etre > 0): {', '.join(bad)}")
    log.debug("Timeouts: rss=%.1fs data=%.1fs", RSS_FETCH_TIMEOUT, DATA_FETCH_TIMEOUT)

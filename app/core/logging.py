from __future__ import annotations

import logging

_LOGGING_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """Configure process-wide logging once; repeated calls are no-ops."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True

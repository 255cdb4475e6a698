"""Environment-driven defaults."""

from __future__ import annotations

import logging
import os


logger = logging.getLogger(__name__)

MIN_MATCHES_ENV = "FRCPICK_MIN_MATCHES"
OPR_WORKERS_ENV = "FRCPICK_OPR_WORKERS"

MIN_MATCHES_DEFAULT = 5
OPR_WORKERS_DEFAULT = 4


def env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_min_matches() -> int:
    return env_int(MIN_MATCHES_ENV, MIN_MATCHES_DEFAULT, min_value=0)


def opr_workers() -> int:
    return env_int(OPR_WORKERS_ENV, OPR_WORKERS_DEFAULT, min_value=1)

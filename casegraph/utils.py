"""Generic helpers (safe arithmetic, ordering, profiling)."""

from __future__ import annotations

import functools
import logging
import math
import re
import time
from typing import Any, Iterable, List, Tuple

import numpy as np

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")


def profile_time(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start_time
        logging.info("[PROFILE] Function '%s' executed in %.3f seconds", func.__name__, elapsed)
        return result

    return wrapper


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 instead of NaN, infinity or ZeroDivisionError."""
    if not denominator:
        return 0.0
    value = numerator / denominator
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return float(value)


def safe_mean(values: Iterable[float]) -> float:
    data = list(values)
    if not data:
        return 0.0
    return safe_ratio(float(np.sum(data)), len(data))


def round_metric(value: float, places: int = 3) -> float:
    return round(float(value), places)


def node_sort_key(node_id: Any) -> Tuple[int, Any]:
    """Order numeric ids numerically and everything else by its string form."""
    if isinstance(node_id, bool):
        return (1, str(node_id))
    if isinstance(node_id, (int, float)):
        return (0, node_id)
    return (1, str(node_id))


def sorted_ids(node_ids: Iterable[Any]) -> List[Any]:
    return sorted(node_ids, key=node_sort_key)


def slugify_filename(value: str) -> str:
    value = re.sub(r"\.json$", "", value.strip(), flags=re.IGNORECASE)
    value = re.sub(r"[^A-Za-z0-9]+", "-", value).strip("-").lower()
    return value or "case-graph"

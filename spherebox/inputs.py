"""
Input parsing — mass lists and container sizes.

Masses arrive as a JSON numeric array, either directly or under the
``numbers`` key of a URL query string. Anything that would produce a
non-physical radius is rejected here, before the engine sees it.
"""

import json
import math
from numbers import Real
from typing import List
from urllib.parse import parse_qs, urlsplit


class ConfigError(ValueError):
    """Raised when simulation input cannot be used to start a run."""


def _check_number(value, what: str) -> float:
    # bool is a subclass of int, json.loads('true') must not become mass 1
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigError(f"{what} must be a number, got {value!r}")
    try:
        value = float(value)
    except OverflowError as e:
        raise ConfigError(f"{what} is out of range for a float") from e
    if not math.isfinite(value):
        raise ConfigError(f"{what} must be finite, got {value!r}")
    if value <= 0:
        raise ConfigError(f"{what} must be positive, got {value!r}")
    return value


def validate_masses(masses) -> List[float]:
    if isinstance(masses, (str, bytes)) or not hasattr(masses, '__iter__'):
        raise ConfigError(f"masses must be a list of numbers, got {masses!r}")
    try:
        items = list(masses)
    except TypeError as e:
        # 0-d numpy arrays have __iter__ but refuse to iterate
        raise ConfigError(f"masses must be a list of numbers, got {masses!r}") from e
    return [_check_number(m, f"mass[{i}]") for i, m in enumerate(items)]


def validate_container_size(size) -> float:
    return _check_number(size, "container size")


def parse_masses(text: str) -> List[float]:
    """'[1, 2.5, 3]' → [1.0, 2.5, 3.0]"""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"masses are not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ConfigError(f"masses must be a JSON array, got {text!r}")
    return validate_masses(data)


def masses_from_query(query: str, key: str = 'numbers') -> List[float]:
    """Read masses from '?numbers=[1,2,3]' or a full URL. Missing key → []."""
    if '://' in query:
        query = urlsplit(query).query
    params = parse_qs(query.lstrip('?'), keep_blank_values=True)
    values = params.get(key)
    if not values or not values[0]:
        return []
    return parse_masses(values[0])


def parse_container_size(text) -> float:
    try:
        size = float(text)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"container size is not a number: {text!r}") from e
    return validate_container_size(size)

"""General helper routines."""

from __future__ import annotations

import dataclasses
import json
import logging
import random
from enum import Enum
from typing import Any

ENV_KUBEFLOW_NAMESPACE = "KUBEFLOW_NAMESPACE"

_LETTERS = "0123456789abcdefghijklmnopqrstuvwxyz"
_rng = random.Random()
_log = logging.getLogger("kubejob")


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return list(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def pformat(value: Any) -> str:
    """Pretty-format ``value`` as indented JSON; strings are returned as is."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, indent=2, default=_json_default)
    except (TypeError, ValueError) as err:
        _log.warning("Couldn't pretty format %r, error: %s", value, err)
        return str(value)


def rand_string(n: int) -> str:
    """Random lowercase alphanumeric string of length ``n`` (DNS-1035 safe)."""
    if n < 0:
        raise ValueError("length must not be negative")
    return "".join(_rng.choice(_LETTERS) for _ in range(n))
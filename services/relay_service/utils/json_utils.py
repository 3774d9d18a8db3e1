"""JSON encode/decode helpers shared by the inbound gate and the upstream relay."""

from __future__ import annotations

import json
import math
from typing import Any, Union

JsonValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def decode_json(raw: bytes) -> JsonValue:
    """Decode a UTF-8 JSON document of any shape.

    Raises:
        ValueError: The bytes are not valid UTF-8, not valid JSON, or contain
            NaN/Infinity literals or numbers that overflow a float.
    """
    try:
        text = raw.decode("utf-8")
        return json.loads(
            text, parse_float=_parse_finite_float, parse_constant=_reject_constant
        )
    except RecursionError as e:
        raise ValueError("JSON document nested too deeply") from e


def encode_compact(value: JsonValue) -> bytes:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False).encode(
        "utf-8"
    )


def render_pretty(value: Any) -> str:
    """Render a JSON value with two-space indentation.

    Raises:
        TypeError: The value holds a type JSON cannot represent.
        ValueError: The value holds NaN/Infinity or a circular reference.
    """
    return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)

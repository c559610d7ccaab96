# pert_estimator/tools/share_codec.py

from __future__ import annotations

import base64
import binascii
import json
import math
from typing import Any, Dict, List
from urllib.parse import parse_qs, urlencode, urlsplit

from pert_estimator.errors import ShareCodeError
from pert_estimator.models import EstimateSet, Task, TASK_FIELDS
from pert_estimator.tools.pert_calculator import aggregate


DEFAULT_SHARE_PARAM = "code"

_NUMERIC_TASK_FIELDS = (
    "estimatedA",
    "estimatedB",
    "estimatedC",
    "threePointEstimated",
    "standardDeviationEstimated",
)


# --------------------------------------------------------------------
# Structured text (JSON) codec
# --------------------------------------------------------------------


def serialize_estimate_set(estimate: EstimateSet) -> str:
    """Compact JSON for an EstimateSet, keys in their wire (camelCase) form."""
    return json.dumps(
        estimate.to_dict(),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )


def _check_number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShareCodeError(f"{where} must be a number.")
    try:
        number = float(value)
    except (OverflowError, ValueError) as e:
        raise ShareCodeError(f"{where} is too large.") from e
    if not math.isfinite(number) or number < 0:
        raise ShareCodeError(f"{where} must be a non-negative finite number.")
    return number


def _check_task(raw: Any, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ShareCodeError(f"tasks[{index}] must be an object.")

    missing = [name for name in TASK_FIELDS if name not in raw]
    if missing:
        raise ShareCodeError(f"tasks[{index}] is missing {', '.join(missing)}.")

    if not isinstance(raw["id"], str) or not raw["id"]:
        raise ShareCodeError(f"tasks[{index}].id must be a non-empty string.")
    if not isinstance(raw["description"], str) or not raw["description"]:
        raise ShareCodeError(f"tasks[{index}].description must be a non-empty string.")

    checked = dict(raw)
    for name in _NUMERIC_TASK_FIELDS:
        checked[name] = _check_number(raw[name], f"tasks[{index}].{name}")

    return checked


def deserialize_estimate_set(text: str) -> EstimateSet:
    """
    Parse JSON produced by serialize_estimate_set().

    Only shape and numeric checks are applied: derived fields are taken as
    stored and the pessimistic > optimistic rule is not re-checked.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise ShareCodeError(f"Share data is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ShareCodeError("Share data must be a JSON object.")

    name = data.get("estimateName")
    if not isinstance(name, str):
        raise ShareCodeError("estimateName must be a string.")

    is_ceil = data.get("isCeilNumbers")
    if not isinstance(is_ceil, bool):
        raise ShareCodeError("isCeilNumbers must be true or false.")

    raw_tasks = data.get("tasks")
    if not isinstance(raw_tasks, list):
        raise ShareCodeError("tasks must be a list.")

    tasks: List[Task] = []
    seen_ids = set()
    for index, raw in enumerate(raw_tasks):
        checked = _check_task(raw, index)
        if checked["id"] in seen_ids:
            raise ShareCodeError(f"tasks[{index}].id is duplicated.")
        seen_ids.add(checked["id"])
        tasks.append(Task.from_dict(checked))

    if not all(math.isfinite(v) for v in aggregate(tasks).values()):
        raise ShareCodeError("Task totals are too large.")

    return EstimateSet(estimate_name=name, is_ceil_numbers=is_ceil, tasks=tuple(tasks))


# --------------------------------------------------------------------
# Text <-> URL-safe text codec
# --------------------------------------------------------------------


def encode_share_code(text: str) -> str:
    """UTF-8 + URL-safe base64 with the '=' padding stripped."""
    raw = base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")
    return raw.rstrip("=")


def decode_share_code(code: str) -> str:
    """
    Reverse encode_share_code().

    Codes written with the standard base64 alphabet are accepted too. A '+'
    from such a code arrives as a space once the query string is parsed, so
    spaces are mapped back first. Bytes that are not valid UTF-8 are read as
    Latin-1, which is how older links encoded non-ASCII text.
    """
    if not isinstance(code, str):
        raise ShareCodeError("Share code must be text.")

    cleaned = code.strip().replace(" ", "+").replace("+", "-").replace("/", "_")
    cleaned = cleaned.rstrip("=")
    if not cleaned:
        raise ShareCodeError("Share code is empty.")

    padded = cleaned + "=" * (-len(cleaned) % 4)
    try:
        data = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise ShareCodeError(f"Share code is not valid base64: {e}") from e

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        # Older links were produced byte-per-character (Latin-1).
        return data.decode("latin-1")


# --------------------------------------------------------------------
# Public helpers
# --------------------------------------------------------------------


def encode_estimate_set(estimate: EstimateSet) -> str:
    return encode_share_code(serialize_estimate_set(estimate))


def decode_estimate_set(code: str) -> EstimateSet:
    return deserialize_estimate_set(decode_share_code(code))


def build_share_link(
    origin: str,
    estimate: EstimateSet,
    param: str = DEFAULT_SHARE_PARAM,
) -> str:
    """`<origin>/?<param>=<code>` for the given estimate."""
    query = urlencode({param: encode_estimate_set(estimate)})
    return f"{origin.rstrip('/')}/?{query}"


def parse_share_link(url: str, param: str = DEFAULT_SHARE_PARAM) -> EstimateSet:
    """Recover the EstimateSet carried by a full share link."""
    query = parse_qs(urlsplit(url).query)
    values = query.get(param)
    if not values:
        raise ShareCodeError(f"Link has no '{param}' parameter.")
    return decode_estimate_set(values[0])

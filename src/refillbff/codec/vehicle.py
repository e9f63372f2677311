"""Vehicle note codec.

Vehicles are stored as the body of CRM notes. Bodies written by the
current app are plain JSON, but older app builds and the CRM's own editor
left several other shapes behind:

- JSON wrapped in HTML (``<p>{...}</p>``, ``&quot;`` entities)
- JSON embedded after prose (``Car details from iOS app:\\n{...}``)
- a JSON array holding several vehicles
- a ``{"vehicles": [...]}`` wrapper
- ``plate`` / ``lic`` / ``license`` instead of ``licensePlate``

Decoding runs an ordered chain of strategies and stops at the first one
that yields records. Nothing here raises on bad input.
"""

import html
import json
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional, Union

from refillbff.models.vehicle import PLATE_ALIASES, VehicleRecord, text_value

logger = logging.getLogger(__name__)

# Minimum recognized fields before a JSON object counts as a vehicle
ACCEPTANCE_THRESHOLD = 2

_SCORED_KEYS: tuple[tuple[str, ...], ...] = (
    ("name",),
    ("make",),
    ("model",),
    ("year",),
    ("color",),
    PLATE_ALIASES,
)

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_P_CLOSE_RE = re.compile(r"</p\s*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")

DecodeStrategy = Callable[[str], Optional[list[VehicleRecord]]]


# ─────────────────────────────────────────────────────────────────────────────
# Encode
# ─────────────────────────────────────────────────────────────────────────────


def encode_vehicle(
    record: Union[VehicleRecord, Mapping[str, Any]],
    indent: Optional[int] = None,
) -> str:
    """Serialize a vehicle to the JSON text stored as a note body."""
    if not isinstance(record, VehicleRecord):
        record = VehicleRecord.model_validate(dict(record))
    return json.dumps(record.to_payload(), indent=indent)


# ─────────────────────────────────────────────────────────────────────────────
# Normalization
# ─────────────────────────────────────────────────────────────────────────────


def _first_value(data: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        value = text_value(data.get(key))
        if value:
            return value
    return ""


def acceptance_score(data: Mapping[str, Any]) -> int:
    """Count recognized fields that carry a value. Plate aliases count once."""
    return sum(1 for keys in _SCORED_KEYS if _first_value(data, keys))


def normalize_vehicle(data: Any) -> Optional[VehicleRecord]:
    """Build a canonical record from a parsed JSON object.

    Returns None when the object scores below the acceptance threshold.
    """
    if not isinstance(data, Mapping):
        return None
    if acceptance_score(data) < ACCEPTANCE_THRESHOLD:
        return None
    return VehicleRecord(
        name=_first_value(data, ("name",)),
        make=_first_value(data, ("make",)),
        model=_first_value(data, ("model",)),
        year=_first_value(data, ("year",)),
        color=_first_value(data, ("color",)),
        license_plate=_first_value(data, PLATE_ALIASES),
    )


def records_from_json(parsed: Any) -> list[VehicleRecord]:
    """Collect accepted records from any parsed JSON value."""
    if isinstance(parsed, list):
        items = parsed
    elif isinstance(parsed, Mapping) and isinstance(parsed.get("vehicles"), list):
        items = parsed["vehicles"]
    else:
        items = [parsed]

    records = []
    for item in items:
        record = normalize_vehicle(item)
        if record is not None:
            records.append(record)
    return records


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, TypeError, RecursionError):
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Decode strategies
# ─────────────────────────────────────────────────────────────────────────────


def strip_html(text: str) -> str:
    """Reduce an HTML note body to plain text."""
    text = _BR_RE.sub("\n", text)
    text = _P_CLOSE_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    return text.replace("\xa0", " ").strip()


def parse_direct(text: str) -> Optional[list[VehicleRecord]]:
    """Parse the whole body as JSON."""
    parsed = _loads(text.strip())
    if parsed is None:
        return None
    return records_from_json(parsed) or None


def parse_html(text: str) -> Optional[list[VehicleRecord]]:
    """Strip HTML markup and entities, then parse as JSON."""
    cleaned = strip_html(text)
    if cleaned == text.strip():
        return None
    return parse_direct(cleaned)


def _block_spans(text: str) -> list[tuple[int, int]]:
    """Outermost object and array spans, earliest start first."""
    spans = []
    for open_char, close_char in (("{", "}"), ("[", "]")):
        start = text.find(open_char)
        end = text.rfind(close_char)
        if start != -1 and end > start:
            spans.append((start, end))
    spans.sort()
    return spans


def _parse_blocks(text: str) -> Optional[list[VehicleRecord]]:
    for start, end in _block_spans(text):
        parsed = _loads(text[start : end + 1])
        if parsed is None:
            continue
        records = records_from_json(parsed)
        if records:
            return records
    return None


def parse_embedded(text: str) -> Optional[list[VehicleRecord]]:
    """Pull a JSON block out of surrounding prose."""
    records = _parse_blocks(text)
    if records:
        return records
    cleaned = strip_html(text)
    if cleaned != text.strip():
        return _parse_blocks(cleaned)
    return None


DECODE_STRATEGIES: tuple[DecodeStrategy, ...] = (
    parse_direct,
    parse_html,
    parse_embedded,
)


# ─────────────────────────────────────────────────────────────────────────────
# Decode
# ─────────────────────────────────────────────────────────────────────────────


def decode_vehicles(text: Any) -> list[VehicleRecord]:
    """Recover every vehicle stored in a note body.

    Returns an empty list when the body holds no vehicle.
    """
    if not isinstance(text, str) or not text.strip():
        return []
    for strategy in DECODE_STRATEGIES:
        records = strategy(text)
        if records:
            return records
    return []


def decode_vehicle(text: Any) -> Optional[VehicleRecord]:
    """Recover the first vehicle stored in a note body, if any."""
    records = decode_vehicles(text)
    return records[0] if records else None


def decode_note_bodies(bodies: Iterable[Any]) -> list[VehicleRecord]:
    """Decode many note bodies, skipping those that hold no vehicle."""
    vehicles: list[VehicleRecord] = []
    for body in bodies:
        records = decode_vehicles(body)
        if not records:
            logger.debug("Skipping note without vehicle data: %.60r", body)
            continue
        vehicles.extend(records)
    return vehicles

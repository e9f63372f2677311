"""Codecs for records stored in CRM text fields."""

from refillbff.codec.status import (
    format_subject,
    looks_like_refill,
    parse_status,
    task_from_properties,
)
from refillbff.codec.vehicle import (
    DECODE_STRATEGIES,
    decode_note_bodies,
    decode_vehicle,
    decode_vehicles,
    encode_vehicle,
)

__all__ = [
    "DECODE_STRATEGIES",
    "decode_note_bodies",
    "decode_vehicle",
    "decode_vehicles",
    "encode_vehicle",
    "format_subject",
    "looks_like_refill",
    "parse_status",
    "task_from_properties",
]

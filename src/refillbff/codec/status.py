"""Task subject status codec.

Refill status lives in the task subject as a ``"(N) "`` prefix:
``(0)`` in progress, ``(1)`` completed, ``(2)`` canceled. A subject without
a recognized prefix is treated as in progress.
"""

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from refillbff.models.task import (
    CODE_BY_STATUS,
    STATUS_BY_CODE,
    ParsedSubject,
    RefillTask,
    TaskStatus,
)

_PREFIX_RE = re.compile(r"^\(([0-9])\)\s*")

DEFAULT_CODE = "0"
REFILL_PREFIXES = ("(0)", "(1)", "(2)")


def parse_status(subject: Optional[str]) -> ParsedSubject:
    """Split a subject into status code, label and clean text.

    Never fails: digits outside 0-2 and missing prefixes both fall back to
    code "0" with the subject left as is.
    """
    subject = subject or ""
    match = _PREFIX_RE.match(subject)
    if match and match.group(1) in STATUS_BY_CODE:
        code = match.group(1)
        return ParsedSubject(
            code=code,
            status=STATUS_BY_CODE[code],
            clean_subject=subject[match.end() :],
        )
    return ParsedSubject(
        code=DEFAULT_CODE,
        status=STATUS_BY_CODE[DEFAULT_CODE],
        clean_subject=subject,
    )


def status_code(value: Union[str, TaskStatus]) -> str:
    """Resolve a code ("1") or label ("completed") to a code."""
    if isinstance(value, TaskStatus):
        return CODE_BY_STATUS[value]
    value = str(value).strip()
    if value in STATUS_BY_CODE:
        return value
    try:
        return CODE_BY_STATUS[TaskStatus(value.lower())]
    except ValueError:
        raise ValueError(f"Unknown task status '{value}'") from None


def format_subject(status: Union[str, TaskStatus], text: str) -> str:
    """Prefix a subject with its status code, replacing any existing prefix."""
    clean = parse_status(text).clean_subject
    return f"({status_code(status)}) {clean}"


def looks_like_refill(clean_subject: Optional[str], raw_subject: Optional[str] = None) -> bool:
    """Check if a task belongs to the refill-booking feature.

    Substring match on "refill", or a status prefix on the raw subject.
    """
    if "refill" in (clean_subject or "").lower():
        return True
    return bool(raw_subject) and raw_subject.startswith(REFILL_PREFIXES)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Read an ``hs_timestamp`` value: epoch millis or ISO 8601."""
    if value in (None, ""):
        return None
    text = str(value).strip()
    if text.isdigit():
        return datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def task_from_properties(task_id: str, properties: Mapping[str, Any]) -> RefillTask:
    """Build a RefillTask from HubSpot task properties."""
    raw = properties.get("hs_task_subject") or ""
    parsed = parse_status(raw)
    return RefillTask(
        id=str(task_id),
        subject=parsed.clean_subject,
        raw_subject=raw,
        status_code=parsed.code,
        status=parsed.status,
        body=properties.get("hs_task_body") or "",
        timestamp=parse_timestamp(properties.get("hs_timestamp")),
    )

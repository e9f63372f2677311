"""Refill task models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Refill booking status, encoded as a subject prefix."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELED = "canceled"


STATUS_BY_CODE = {
    "0": TaskStatus.IN_PROGRESS,
    "1": TaskStatus.COMPLETED,
    "2": TaskStatus.CANCELED,
}

CODE_BY_STATUS = {status: code for code, status in STATUS_BY_CODE.items()}


class ParsedSubject(BaseModel):
    """A task subject split into status prefix and display text."""

    code: str
    status: TaskStatus
    clean_subject: str


class RefillTask(BaseModel):
    """One refill booking backed by a CRM task."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    subject: str
    raw_subject: str
    status_code: str = "0"
    status: TaskStatus = TaskStatus.IN_PROGRESS
    body: str = ""
    timestamp: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        """Neither completed nor canceled."""
        return self.status == TaskStatus.IN_PROGRESS

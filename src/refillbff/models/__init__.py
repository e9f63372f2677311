"""Data models for refillbff."""

from refillbff.models.config import ServiceConfig
from refillbff.models.contact import ContactInfo, ContactStatus
from refillbff.models.payment import PaymentIntentResult, PortalSession, SetupIntentResult
from refillbff.models.task import (
    CODE_BY_STATUS,
    STATUS_BY_CODE,
    ParsedSubject,
    RefillTask,
    TaskStatus,
)
from refillbff.models.vehicle import PLATE_ALIASES, SyncReport, VehicleRecord

__all__ = [
    # Config
    "ServiceConfig",
    # Vehicle
    "VehicleRecord",
    "PLATE_ALIASES",
    "SyncReport",
    # Contact
    "ContactInfo",
    "ContactStatus",
    # Tasks
    "RefillTask",
    "TaskStatus",
    "ParsedSubject",
    "STATUS_BY_CODE",
    "CODE_BY_STATUS",
    # Payment
    "PaymentIntentResult",
    "SetupIntentResult",
    "PortalSession",
]

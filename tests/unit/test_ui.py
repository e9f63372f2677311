"""Tests for CLI UI helpers."""

from rich.console import Console

from refillbff.cli.ui import (
    create_config_table,
    create_subject_table,
    create_vehicle_table,
    error_panel,
    masked_value,
    success_panel,
    warning_panel,
)
from refillbff.codec import parse_status
from refillbff.models import ServiceConfig, VehicleRecord


def render(renderable) -> str:
    console = Console(width=120, record=True)
    console.print(renderable)
    return console.export_text()


class TestMaskedValue:
    def test_long_value(self):
        assert masked_value("pat-na1-abcdef1234") == "**************1234"

    def test_short_value(self):
        assert masked_value("123") == "***"

    def test_custom_visible_chars(self):
        assert masked_value("sk_test_123456", visible_chars=6) == "********123456"

    def test_empty_string(self):
        assert masked_value("") == ""


class TestPanels:
    def test_success(self):
        assert "Saved" in render(success_panel("Saved"))

    def test_error_with_details(self):
        text = render(error_panel("Missing HUBSPOT_TOKEN", "Set it first"))
        assert "Missing HUBSPOT_TOKEN" in text
        assert "Set it first" in text

    def test_warning(self):
        assert "No vehicle" in render(warning_panel("No vehicle"))


class TestTables:
    def test_vehicle_table(self):
        table = create_vehicle_table(
            [VehicleRecord(make="Toyota", model="Tacoma", license_plate="8ABC123")]
        )
        text = render(table)
        assert "Tacoma" in text
        assert "8ABC123" in text

    def test_subject_table(self):
        text = render(create_subject_table(parse_status("(2) Refill request"), True))
        assert "canceled" in text
        assert "Refill request" in text
        assert "yes" in text

    def test_config_table_masks_secrets(self):
        config = ServiceConfig(hubspot_token="pat-na1-abcdef1234")
        text = render(create_config_table(config))
        assert "pat-na1-abcdef1234" not in text
        assert "1234" in text
        assert "missing" not in text

    def test_config_table_missing_token(self):
        text = render(create_config_table(ServiceConfig()))
        assert "missing" in text

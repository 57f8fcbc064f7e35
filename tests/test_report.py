import json
from datetime import datetime, timezone

from core.models import OperatingSystemInfo, OsInventory, TargetError
from core.report import write_json_report
from reports.formatter import format_size, format_value


def test_write_json_report(tmp_path):
    inventory = OsInventory(
        meta={"targets": ["sql02", "ghost"]},
        results=[OperatingSystemInfo(
            computer_name="sql02.corp.example.com",
            last_boot_time=datetime(2024, 1, 10, 5, 0, tzinfo=timezone.utc),
            total_visible_memory=1024,
        )],
        errors=[TargetError("ghost", "resolve", "NetworkNameError: nope", "Check DNS")],
    )

    path = write_json_report(inventory, tmp_path / "out" / "inventory.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["meta"]["targets"] == ["sql02", "ghost"]
    assert data["results"][0]["last_boot_time"] == "2024-01-10T05:00:00+00:00"
    assert data["results"][0]["total_visible_memory"] == 1024
    assert data["errors"][0] == {
        "computer_name": "ghost",
        "stage": "resolve",
        "error": "NetworkNameError: nope",
        "remediation": "Check DNS",
    }


def test_format_size():
    assert format_size(None) == ""
    assert format_size(512) == "512 B"
    assert format_size(2048) == "2.00 KB"
    assert format_size(16 * 1024 ** 3) == "16.00 GB"
    assert format_size(3 * 1024 ** 4) == "3.00 TB"


def test_format_value():
    assert format_value("total_visible_memory", 1024 ** 2) == "1.00 MB"
    assert format_value("status", None) == ""
    assert format_value("is_wsfc", False) == "False"
    when = datetime(2024, 1, 10, 5, 0, tzinfo=timezone.utc)
    assert format_value("last_boot_time", when) == "2024-01-10 05:00:00+00:00"

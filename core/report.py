import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path


def _json_default(value):
    # datetimes from CIM are the only non-JSON values in the inventory
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_json_report(report, out_path: str | Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with out_path.open("w", encoding="utf-8") as f:
        json.dump(asdict(report), f, indent=2, ensure_ascii=False, default=_json_default)

    return out_path

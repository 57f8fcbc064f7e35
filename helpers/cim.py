"""
    CIM/WMI access for remote and local Windows hosts.

    Collectors talk to a CimClient rather than to the wmi package directly, so
    any object with a matching query() method can stand in for the transport.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

from core.errors import CimQueryError
from core.models import Credential

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "root\\cimv2"

# yyyymmddHHMMSS.ffffff+UUU  (UUU = UTC offset in minutes)
_CIM_DATETIME = re.compile(
    r"^(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})\.(\d{6})([+-])(\d{3})$"
)


class CimClient(Protocol):
    def query(
        self,
        computer_name: str,
        class_name: str,
        namespace: str = DEFAULT_NAMESPACE,
        credential: Credential | None = None,
        local: bool = False,
    ) -> list[dict[str, Any]]:
        ...


class WmiCimClient:
    """CimClient backed by the wmi package (Windows only)."""

    def _connect(self, computer_name: str, namespace: str,
                 credential: Credential | None, local: bool):
        import wmi

        kwargs: dict[str, Any] = {"namespace": namespace}
        if not local:
            kwargs["computer"] = computer_name
            # WMI refuses user credentials on local connections
            if credential is not None:
                kwargs["user"] = credential.username
                kwargs["password"] = credential.password
        return wmi.WMI(**kwargs)

    def query(
        self,
        computer_name: str,
        class_name: str,
        namespace: str = DEFAULT_NAMESPACE,
        credential: Credential | None = None,
        local: bool = False,
    ) -> list[dict[str, Any]]:
        logger.debug("Querying %s in %s on %s", class_name, namespace, computer_name)
        try:
            conn = self._connect(computer_name, namespace, credential, local)
            items = conn.query(f"SELECT * FROM {class_name}")
            # property reads go back to the provider and can fail too
            rows = [{prop: getattr(item, prop, None) for prop in item.properties} for item in items]
        except Exception as e:
            # wmi raises x_wmi and pywintypes.com_error; neither is importable off Windows
            raise CimQueryError(computer_name, class_name, namespace, f"{type(e).__name__}: {e}") from e
        return rows


def parse_cim_datetime(value: str | datetime | None) -> datetime | None:
    """
    Convert a CIM DMTF datetime string into an aware datetime.

    Example: "20240115083015.500000+060" -> 2024-01-15 08:30:15.5 at UTC+01:00.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value

    m = _CIM_DATETIME.match(value.strip())
    if m is None:
        raise ValueError(f"Not a CIM datetime: {value!r}")

    year, month, day, hour, minute, second, micro, sign, offset = m.groups()
    minutes = int(offset) if sign == "+" else -int(offset)
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), int(micro),
        tzinfo=timezone(timedelta(minutes=minutes)),
    )


def first(rows: list[dict[str, Any]]) -> dict[str, Any]:
    """First CIM object of a result set, or an empty dict."""
    return rows[0] if rows else {}

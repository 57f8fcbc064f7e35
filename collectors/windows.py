"""
    Windows operating system inventory over CIM/WMI.
    Identity and Context - Who/What is each target Windows machine.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from core.errors import SqlAdminError
from core.models import Credential, NetworkName, OperatingSystemInfo, OsInventory, Stage, TargetError
from helpers.cim import CimClient, WmiCimClient, first, parse_cim_datetime
from shared.language import get_language
from shared.network import resolve_network_name

logger = logging.getLogger(__name__)

POWER_NAMESPACE = "root\\cimv2\\power"
CLUSTER_NAMESPACE = "root\\MSCluster"

REMEDIATION: dict[Stage, str] = {
    "resolve": "Check the computer name and that DNS can resolve it from this host.",
    "os": "Ensure WMI is reachable (RPC/DCOM, TCP 135 and dynamic ports) and the account has remote WMI rights.",
    "timezone": "Ensure the account can read Win32_TimeZone on the target.",
}


class _StageFailed(Exception):
    def __init__(self, stage: Stage, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage}: {cause}")


def _kib_to_bytes(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value) * 1024


def _int_or_none(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def active_power_plan(plans: list[dict[str, Any]]) -> str | None:
    """ElementName of the plan flagged IsActive, if any."""
    for plan in plans:
        if plan.get("IsActive"):
            return plan.get("ElementName")
    return None


def build_record(net: NetworkName, os_row: dict[str, Any], tz_row: dict[str, Any],
                 power_plan: str | None, is_wsfc: bool) -> OperatingSystemInfo:
    """Project the raw CIM objects for one target into a flat record."""
    language = get_language(os_row.get("OSLanguage"))
    if language is None and os_row.get("OSLanguage") is None:
        language = get_language(os_row.get("Locale"), hex_digits=True)

    return OperatingSystemInfo(
        computer_name=net.full_computer_name,
        manufacturer=os_row.get("Manufacturer"),
        organization=os_row.get("Organization"),
        architecture=os_row.get("OSArchitecture"),
        version=os_row.get("Version"),
        build=os_row.get("BuildNumber"),
        os_version=os_row.get("Caption"),
        sp_version=_int_or_none(os_row.get("ServicePackMajorVersion")),
        install_date=parse_cim_datetime(os_row.get("InstallDate")),
        last_boot_time=parse_cim_datetime(os_row.get("LastBootUpTime")),
        local_date_time=parse_cim_datetime(os_row.get("LocalDateTime")),
        time_zone=tz_row.get("Caption"),
        time_zone_standard=tz_row.get("StandardName"),
        time_zone_daylight=tz_row.get("DaylightName"),
        boot_device=os_row.get("BootDevice"),
        system_device=os_row.get("SystemDevice"),
        system_drive=os_row.get("SystemDrive"),
        windows_directory=os_row.get("WindowsDirectory"),
        paging_file_size=_kib_to_bytes(os_row.get("SizeStoredInPagingFiles")),
        total_visible_memory=_kib_to_bytes(os_row.get("TotalVisibleMemorySize")),
        free_physical_memory=_kib_to_bytes(os_row.get("FreePhysicalMemory")),
        total_virtual_memory=_kib_to_bytes(os_row.get("TotalVirtualMemorySize")),
        free_virtual_memory=_kib_to_bytes(os_row.get("FreeVirtualMemory")),
        active_power_plan=power_plan,
        status=os_row.get("Status"),
        language=language.name if language else None,
        language_id=language.language_id if language else _int_or_none(os_row.get("OSLanguage")),
        language_two_letter=language.two_letter if language else None,
        code_set=os_row.get("CodeSet"),
        country_code=os_row.get("CountryCode"),
        locale=os_row.get("Locale"),
        is_wsfc=is_wsfc,
    )


def _collect_one(computer_name: str, credential: Credential | None, cim: CimClient,
                 resolver: Callable[[str], NetworkName]) -> OperatingSystemInfo:
    try:
        net = resolver(computer_name)
    except SqlAdminError as e:
        raise _StageFailed("resolve", e) from e

    target = net.full_computer_name

    def _query(stage: Stage, class_name: str, namespace: str = "root\\cimv2") -> list[dict[str, Any]]:
        try:
            return cim.query(target, class_name, namespace, credential, local=net.is_local)
        except SqlAdminError as e:
            raise _StageFailed(stage, e) from e

    os_rows = _query("os", "Win32_OperatingSystem")
    if not os_rows:
        raise _StageFailed("os", SqlAdminError(f"Win32_OperatingSystem returned nothing for {target}"))
    tz_row = first(_query("timezone", "Win32_TimeZone"))

    # Power plan and cluster membership are optional: older or locked-down
    # hosts do not expose these namespaces.
    try:
        power_plan = active_power_plan(_query("power_plan", "Win32_PowerPlan", POWER_NAMESPACE))
    except _StageFailed as e:
        logger.warning("Could not read power plan on %s: %s", target, e.cause)
        power_plan = None

    try:
        is_wsfc = bool(_query("cluster", "MSCluster_Cluster", CLUSTER_NAMESPACE))
    except _StageFailed as e:
        logger.debug("No failover cluster information on %s: %s", target, e.cause)
        is_wsfc = False

    try:
        return build_record(net, os_rows[0], tz_row, power_plan, is_wsfc)
    except ValueError as e:
        raise _StageFailed("os", e) from e


def get_operating_system(
    computer_names: Iterable[str],
    credential: Credential | None = None,
    *,
    cim_client: CimClient | None = None,
    resolver: Callable[[str], NetworkName] = resolve_network_name,
    enable_exception: bool = False,
) -> OsInventory:
    """
        Collect operating system details from each target computer.

        Each target is handled on its own: a failure is logged, recorded as a
        TargetError and the next target is processed. With enable_exception the
        underlying error is raised instead.

        Returns:
            OsInventory: one OperatingSystemInfo per reachable target plus errors.
    """
    cim = cim_client if cim_client is not None else WmiCimClient()
    inventory = OsInventory(meta={
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "targets": [],
    })

    for computer_name in computer_names:
        inventory.meta["targets"].append(computer_name)
        logger.info("Collecting operating system details from %s", computer_name)
        try:
            inventory.results.append(_collect_one(computer_name, credential, cim, resolver))
        except _StageFailed as e:
            if enable_exception:
                raise e.cause
            logger.warning("Failure on %s during %s: %s", computer_name, e.stage, e.cause)
            inventory.errors.append(TargetError(
                computer_name=computer_name,
                stage=e.stage,
                error=f"{type(e.cause).__name__}: {e.cause}",
                remediation=REMEDIATION.get(e.stage),
            ))
        except Exception as e:
            if enable_exception:
                raise
            logger.exception("Unexpected failure on %s", computer_name)
            inventory.errors.append(TargetError(
                computer_name=computer_name,
                stage="os",
                error=f"{type(e).__name__}: {e}",
                remediation=REMEDIATION["os"],
            ))

    return inventory

# core/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Any

Stage = Literal["resolve", "os", "timezone", "power_plan", "cluster"]

@dataclass(frozen=True)
class Credential:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***')"

@dataclass
class NetworkName:
    input_name: str
    computer_name: str
    ip_address: str | None
    fqdn: str | None
    domain: str | None
    full_computer_name: str
    is_local: bool = False

@dataclass
class LanguageInfo:
    language_id: int
    name: str                  # e.g. "en-US"
    two_letter: str            # e.g. "en"

@dataclass
class OperatingSystemInfo:
    computer_name: str
    manufacturer: str | None = None
    organization: str | None = None
    architecture: str | None = None
    version: str | None = None
    build: str | None = None
    os_version: str | None = None
    sp_version: int | None = None
    install_date: datetime | None = None
    last_boot_time: datetime | None = None
    local_date_time: datetime | None = None
    time_zone: str | None = None
    time_zone_standard: str | None = None
    time_zone_daylight: str | None = None
    boot_device: str | None = None
    system_device: str | None = None
    system_drive: str | None = None
    windows_directory: str | None = None
    # memory values are bytes
    paging_file_size: int | None = None
    total_visible_memory: int | None = None
    free_physical_memory: int | None = None
    total_virtual_memory: int | None = None
    free_virtual_memory: int | None = None
    active_power_plan: str | None = None
    status: str | None = None
    language: str | None = None
    language_id: int | None = None
    language_two_letter: str | None = None
    code_set: str | None = None
    country_code: str | None = None
    locale: str | None = None
    is_wsfc: bool = False

@dataclass
class TargetError:
    computer_name: str
    stage: Stage
    error: str
    remediation: str | None = None

@dataclass
class OsInventory:
    meta: dict[str, Any] = field(default_factory=dict)
    results: list[OperatingSystemInfo] = field(default_factory=list)
    errors: list[TargetError] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

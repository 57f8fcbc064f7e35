import pytest

from core.errors import CimQueryError, NetworkNameError
from core.models import NetworkName

OS_ROW = {
    "Caption": "Microsoft Windows Server 2022 Datacenter",
    "Manufacturer": "Microsoft Corporation",
    "Organization": "Contoso",
    "OSArchitecture": "64-bit",
    "Version": "10.0.20348",
    "BuildNumber": "20348",
    "ServicePackMajorVersion": 0,
    "InstallDate": "20230301101500.000000+000",
    "LastBootUpTime": "20240110060000.000000+060",
    "LocalDateTime": "20240115083015.500000+060",
    "BootDevice": "\\Device\\HarddiskVolume1",
    "SystemDevice": "\\Device\\HarddiskVolume2",
    "SystemDrive": "C:",
    "WindowsDirectory": "C:\\Windows",
    "SizeStoredInPagingFiles": "4194304",
    "TotalVisibleMemorySize": "16777216",
    "FreePhysicalMemory": "8388608",
    "TotalVirtualMemorySize": "20971520",
    "FreeVirtualMemory": "10485760",
    "Status": "OK",
    "OSLanguage": 1033,
    "CodeSet": "1252",
    "CountryCode": "1",
    "Locale": "0409",
}

TZ_ROW = {
    "Caption": "(UTC+01:00) Amsterdam, Berlin, Bern, Rome, Stockholm, Vienna",
    "StandardName": "W. Europe Standard Time",
    "DaylightName": "W. Europe Daylight Time",
}

POWER_PLANS = [
    {"ElementName": "Balanced", "IsActive": False},
    {"ElementName": "High performance", "IsActive": True},
]


class FakeCim:
    """CimClient serving canned rows; a CimQueryError instance as a value makes the query fail."""

    def __init__(self, data=None):
        self.data = data if data is not None else {}
        self.calls = []

    def query(self, computer_name, class_name, namespace="root\\cimv2", credential=None, local=False):
        self.calls.append((computer_name, class_name, namespace, credential, local))
        value = self.data.get((computer_name, class_name))
        if value is None:
            value = self.data.get(class_name, [])
        if isinstance(value, Exception):
            raise value
        return value


def fake_resolver(name):
    if name == "ghost":
        raise NetworkNameError(name, "Name or service not known")
    if name == ".":
        return NetworkName(".", "dbhost01", "10.0.0.5", "dbhost01.corp.example.com",
                           "corp.example.com", "dbhost01.corp.example.com", is_local=True)
    return NetworkName(name, name, "10.0.0.20", f"{name}.corp.example.com",
                       "corp.example.com", f"{name}.corp.example.com")


def cim_error(computer, class_name, namespace="root\\cimv2"):
    return CimQueryError(computer, class_name, namespace, "Access is denied")


@pytest.fixture
def healthy_cim():
    return FakeCim({
        "Win32_OperatingSystem": [OS_ROW],
        "Win32_TimeZone": [TZ_ROW],
        "Win32_PowerPlan": POWER_PLANS,
        "MSCluster_Cluster": [],
    })

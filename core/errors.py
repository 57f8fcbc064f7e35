"""
    Exceptions raised by the toolkit.
"""


class SqlAdminError(Exception):
    """Base class for every error raised by this package."""


class CimQueryError(SqlAdminError):
    def __init__(self, computer_name: str, class_name: str, namespace: str, reason: str):
        self.computer_name = computer_name
        self.class_name = class_name
        self.namespace = namespace
        self.reason = reason
        super().__init__(f"{class_name} ({namespace}) on {computer_name}: {reason}")


class NetworkNameError(SqlAdminError):
    def __init__(self, computer_name: str, reason: str):
        self.computer_name = computer_name
        self.reason = reason
        super().__init__(f"Cannot resolve {computer_name!r}: {reason}")


class UrnFormatError(SqlAdminError, ValueError):
    """Raised when a URN string cannot be parsed."""

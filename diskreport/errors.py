"""
diskreport.errors
AUTHOR: carter-vin

Error taxonomy

Fatal (abort before any host is contacted):
- ConfigurationError / HostListNotFound

Per-host (caught at the host boundary, converted to a FAILED record):
- HostUnreachable
- InventoryQueryError

Raised by inventory collaborators:
- RemoteQueryError -> AuthError | TransportError | InventoryNotFoundError
"""

from __future__ import annotations


class DiskReportError(Exception):
    """Base for all diskreport errors."""


class ConfigurationError(DiskReportError):
    pass


class HostListNotFound(ConfigurationError):
    def __init__(self, path) -> None:
        super().__init__(f"host list file not found: {path}")
        self.path = path


class HostUnreachable(DiskReportError):
    pass


class InventoryQueryError(DiskReportError):
    pass


class RemoteQueryError(DiskReportError):
    pass


class AuthError(RemoteQueryError):
    pass


class TransportError(RemoteQueryError):
    pass


class InventoryNotFoundError(RemoteQueryError):
    pass

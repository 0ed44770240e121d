"""diskreport.collectors package exports."""

from diskreport.collectors.base import InventoryService, Prober, RawDisk
from diskreport.collectors.inventory import LocalInventory, RoutingInventory, SshDfInventory
from diskreport.collectors.probe import PingProber

__all__ = [
    "InventoryService",
    "LocalInventory",
    "PingProber",
    "Prober",
    "RawDisk",
    "RoutingInventory",
    "SshDfInventory",
]

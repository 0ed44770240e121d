"""diskreport: fixed-disk capacity report across hosts."""

__version__ = "0.1.0"

"""
Core helpers shared by scripts and services.

Public API:
    - check_internet_connectivity: Single reachability probe, True/False
    - get_network_status: Same probe plus a display string

Usage:
    from core import get_network_status

    online, text = get_network_status()
"""

from core.network import check_internet_connectivity, get_network_status

__all__ = [
    "check_internet_connectivity",
    "get_network_status",
]

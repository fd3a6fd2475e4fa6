"""
Connectivity Models Package
"""

from connectivity.models.config import ConnectionConfig, ProbeConfig, ScheduleConfig

__all__ = [
    "ConnectionConfig",
    "ProbeConfig",
    "ScheduleConfig",
]

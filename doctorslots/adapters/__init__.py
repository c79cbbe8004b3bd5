"""
Adapters layer - Storage integrations for schedule rows.
"""

from .json_store import JsonScheduleStore

__all__ = ["JsonScheduleStore"]

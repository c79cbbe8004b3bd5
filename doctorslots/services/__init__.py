"""
Service layer helpers that orchestrate the schedule store and domain logic.
"""

from .schedule_service import ScheduleService, ScheduleStoreProtocol

__all__ = ["ScheduleService", "ScheduleStoreProtocol"]

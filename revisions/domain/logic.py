from datetime import datetime, timedelta

from .enums import Cycle
from ..config import CYCLE_DAYS


def scheduled_date_for(solved_date: datetime, cycle: str) -> datetime:
    # Wall-clock addition: whole calendar days in solved_date's zone
    return solved_date + timedelta(days=CYCLE_DAYS[Cycle(cycle).value])


def completion_rate(completed: int, pending: int) -> float:
    total = completed + pending
    if total == 0:
        return 0.0
    return round(completed / total * 100, 1)

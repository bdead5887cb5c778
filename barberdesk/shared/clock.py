"""Business-local clock"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from ..config import BUSINESS_TIMEZONE


def local_now() -> datetime:
    """Current time in the business timezone"""
    return datetime.now(ZoneInfo(BUSINESS_TIMEZONE))


def local_today() -> date:
    return local_now().date()

"""
Utility functions for the application.
"""
from typing import Any, Dict, List, Optional
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo
from vibecheck.core.config import settings


def local_now(tz_name: Optional[str] = None) -> datetime:
    """
    Current time on the configured calendar.
    An empty zone name means the server's local time, never implicit UTC.
    """
    tz_name = settings.TIMEZONE if tz_name is None else tz_name
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now().astimezone()


def local_today(tz_name: Optional[str] = None) -> date:
    """Calendar date at local midnight boundaries."""
    return local_now(tz_name).date()


def date_window(today: date, days: int) -> List[date]:
    """Dates from today back ``days - 1`` days, newest first."""
    return [today - timedelta(days=offset) for offset in range(days)]


def format_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response

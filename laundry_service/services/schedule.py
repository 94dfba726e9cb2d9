"""
Collection calendar: local dates, public holidays and gender collection days
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from laundry_service.config import settings
from laundry_service.exceptions import ValidationFailed


PUBLIC_HOLIDAYS = {
    # 2025
    date(2025, 1, 26): "Republic Day",
    date(2025, 3, 14): "Holi",
    date(2025, 4, 10): "Mahavir Jayanti",
    date(2025, 4, 18): "Good Friday",
    date(2025, 8, 15): "Independence Day",
    date(2025, 8, 27): "Janmashtami",
    date(2025, 10, 2): "Gandhi Jayanti",
    date(2025, 10, 21): "Dussehra",
    date(2025, 10, 31): "Diwali",
    date(2025, 11, 5): "Guru Nanak Jayanti",
    date(2025, 12, 25): "Christmas",
    # 2026
    date(2026, 1, 26): "Republic Day",
    date(2026, 3, 4): "Holi",
    date(2026, 3, 30): "Mahavir Jayanti",
    date(2026, 4, 3): "Good Friday",
    date(2026, 8, 15): "Independence Day",
    date(2026, 8, 16): "Janmashtami",
    date(2026, 10, 2): "Gandhi Jayanti",
    date(2026, 10, 11): "Dussehra",
    date(2026, 10, 19): "Diwali",
    date(2026, 11, 25): "Guru Nanak Jayanti",
    date(2026, 12, 25): "Christmas",
}

# date.weekday(): Monday is 0
COLLECTION_DAYS = {
    "male": (0, 2, 4),
    "female": (1, 3, 5),
}
SUNDAY = 6


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def local_date(moment: datetime) -> date:
    """Calendar date of a timestamp in the campus timezone (naive values are UTC)"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(local_tz()).date()


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """UTC start (inclusive) and end (exclusive) of a local calendar day"""
    start = datetime.combine(day, time.min, tzinfo=local_tz())
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def holiday_name(day: date) -> Optional[str]:
    return PUBLIC_HOLIDAYS.get(day)


def check_collection_day(gender: Optional[str], day: date) -> None:
    """
    Verify laundry can be handed in on a given day
    
    Raises:
        ValidationFailed: On holidays, Sundays, a missing gender or the
            wrong weekday for the gender
    """
    name = holiday_name(day)
    if name:
        raise ValidationFailed(
            f"Orders are not accepted on {name}. Please try again on the next working day."
        )
    if day.weekday() == SUNDAY:
        raise ValidationFailed("Laundry collection is not available on Sunday")
    if gender not in COLLECTION_DAYS:
        raise ValidationFailed("Please update your gender in profile settings")
    if day.weekday() not in COLLECTION_DAYS[gender]:
        if gender == "male":
            raise ValidationFailed("Boys can only submit laundry on Monday, Wednesday, and Friday")
        raise ValidationFailed("Girls can only submit laundry on Tuesday, Thursday, and Saturday")

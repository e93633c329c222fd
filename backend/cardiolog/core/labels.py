"""
Chart label formatting per locale.
"""

from datetime import date

_WEEKDAYS = {
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    "zh": ("周一", "周二", "周三", "周四", "周五", "周六", "周日"),
}

_MONTHS_EN = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class LabelFormatter:
    """Formats bucket labels for one locale."""

    def __init__(self, locale: str = "en"):
        self.locale = locale if locale in _WEEKDAYS else "en"

    def hour_label(self, hour: int) -> str:
        return f"{hour:02d}:00"

    def weekday_label(self, day: date) -> str:
        return _WEEKDAYS[self.locale][day.weekday()]

    def day_label(self, day: date) -> str:
        return str(day.day)

    def short_date_label(self, day: date) -> str:
        """"Nov 17" or "11月17日"."""
        if self.locale == "zh":
            return f"{day.month}月{day.day}日"
        return f"{_MONTHS_EN[day.month - 1]} {day.day}"


def get_label_formatter(locale: str = "en") -> LabelFormatter:
    """Return a formatter for ``locale``, falling back to English."""
    return LabelFormatter(locale)


def month_abbr(month: int) -> str:
    """English month abbreviation, independent of the process locale."""
    return _MONTHS_EN[month - 1]

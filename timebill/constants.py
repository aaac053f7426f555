from datetime import date

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Indexed by date.weekday() (Monday == 0).
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

CSV_CONTENT_TYPE = "text/csv"
PDF_CONTENT_TYPE = "application/pdf"
ZIP_CONTENT_TYPE = "application/zip"


def ordinal_suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_mdy(d: date) -> str:
    """3/4/2024"""
    return f"{d.month}/{d.day}/{d.year}"


def format_md(d: date) -> str:
    """3/4"""
    return f"{d.month}/{d.day}"


def format_mmddyy(d: date) -> str:
    """03/04/24"""
    return f"{d.month:02d}/{d.day:02d}/{d.year % 100:02d}"


def format_full_date(d: date) -> str:
    """Monday, March 4, 2024"""
    return f"{DAY_NAMES[d.weekday()]}, {MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"


def format_long_date(d: date) -> str:
    """March 31st, 2024"""
    return f"{MONTH_NAMES[d.month - 1]} {d.day}{ordinal_suffix(d.day)}, {d.year}"


def format_month_day(d: date) -> str:
    """March 15th"""
    return f"{MONTH_NAMES[d.month - 1]} {d.day}{ordinal_suffix(d.day)}"

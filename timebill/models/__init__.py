from decimal import Decimal


def format_usd(amount: Decimal) -> str:
    """Format a dollar amount: Decimal('1320') -> '$1,320.00'"""
    return f"${Decimal(amount):,.2f}"


def format_hours(hours: Decimal | float | int) -> str:
    """Format hours without trailing zeros: Decimal('7.50') -> '7.5', Decimal('8.00') -> '8'"""
    value = Decimal(str(hours)).normalize()
    return format(value, "f")

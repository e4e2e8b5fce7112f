from datetime import date

from dateutil.relativedelta import relativedelta


def months_between(start: date, end: date) -> int:
    """Whole months elapsed from ``start`` to ``end``.

    A month only counts once the start's day of month has been reached, so a
    2020-02-29 start has completed 11 months on 2021-02-28, not 12.
    """
    if end <= start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def add_months(value: date, months: int) -> date:
    # relativedelta clamps to the last day of shorter months
    return value + relativedelta(months=months)

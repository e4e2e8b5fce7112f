import math
from collections.abc import Callable, Mapping
from datetime import date
from fractions import Fraction
from typing import Any

from vestledger.core.errors import InvalidGrant, InvalidSchedule
from vestledger.models import Employee, VestingOutcome, VestingSchedule, VestingType
from vestledger.services.dates import add_months, months_between

# Share of the grant released in each year after the cliff.
BACKLOADED_TRANCHES = (Fraction(1, 10), Fraction(2, 10), Fraction(3, 10), Fraction(4, 10))


def _schedule_fields(schedule: VestingSchedule | Mapping[str, Any]) -> tuple[int, int, Any]:
    if not isinstance(schedule, Mapping):
        return schedule.cliff_months, schedule.vesting_months, schedule.vesting_type

    try:
        cliff_months = schedule["cliff_months"]
        vesting_months = schedule["vesting_months"]
        vesting_type = schedule["vesting_type"]
    except KeyError as exc:
        raise InvalidSchedule(f"missing schedule field: {exc.args[0]}") from None

    for name, value in (("cliff_months", cliff_months), ("vesting_months", vesting_months)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSchedule(f"{name} must be an integer")
    return cliff_months, vesting_months, vesting_type


def validate_schedule(schedule: VestingSchedule | Mapping[str, Any]) -> None:
    """Check a schedule for internal consistency.

    Accepts a ``VestingSchedule`` or a raw mapping, so tags that never made it
    into ``VestingType`` can still be rejected with ``InvalidSchedule``.
    """
    cliff_months, vesting_months, vesting_type = _schedule_fields(schedule)

    if cliff_months < 0:
        raise InvalidSchedule("cliff months cannot be negative")
    if vesting_months <= cliff_months:
        raise InvalidSchedule("total vesting months must be greater than cliff months")
    try:
        VestingType(vesting_type)
    except ValueError:
        raise InvalidSchedule(f"invalid vesting type: {vesting_type}") from None


def _linear_vested(total_units: int, months_employed: int, schedule: VestingSchedule) -> int:
    post_cliff_months = schedule.vesting_months - schedule.cliff_months
    if post_cliff_months <= 0:
        raise InvalidSchedule("total vesting months must be greater than cliff months")
    months_vested = min(months_employed - schedule.cliff_months, post_cliff_months)
    return (total_units * months_vested) // post_cliff_months


def _backloaded_vested(total_units: int, months_employed: int, schedule: VestingSchedule) -> int:
    elapsed = months_employed - schedule.cliff_months
    full_years, remainder_months = divmod(elapsed, 12)

    percent = sum(BACKLOADED_TRANCHES[:full_years], Fraction(0))
    if full_years < len(BACKLOADED_TRANCHES) and remainder_months > 0:
        percent += BACKLOADED_TRANCHES[full_years] * Fraction(remainder_months, 12)

    return math.floor(total_units * percent)


_POLICIES: dict[VestingType, Callable[[int, int, VestingSchedule], int]] = {
    VestingType.LINEAR: _linear_vested,
    VestingType.BACKLOADED: _backloaded_vested,
}


def calculate_vesting(employee: Employee, as_of: date) -> VestingOutcome:
    if employee.total_units <= 0:
        raise InvalidGrant(employee.employee_id, employee.total_units)

    schedule = employee.schedule
    months_employed = months_between(employee.start_date, as_of)

    if months_employed < schedule.cliff_months:
        return VestingOutcome(
            employee_id=employee.employee_id,
            vested_units=0,
            unvested_units=employee.total_units,
            next_vest_date=add_months(employee.start_date, schedule.cliff_months),
            as_of=as_of,
        )

    policy = _POLICIES.get(schedule.vesting_type)
    if policy is None:
        # only reachable when the schedule bypassed model validation
        raise InvalidSchedule(f"invalid vesting type: {schedule.vesting_type}")

    vested = min(policy(employee.total_units, months_employed, schedule), employee.total_units)
    next_vest_date = add_months(as_of, 1) if vested < employee.total_units else None

    return VestingOutcome(
        employee_id=employee.employee_id,
        vested_units=vested,
        unvested_units=employee.total_units - vested,
        next_vest_date=next_vest_date,
        as_of=as_of,
    )

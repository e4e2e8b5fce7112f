from datetime import date

import pytest

from vestledger.core.errors import InvalidGrant, InvalidSchedule
from vestledger.models import Employee, VestingSchedule, VestingType
from vestledger.services.vesting import calculate_vesting, validate_schedule


def test_nothing_vests_before_cliff(make_employee) -> None:
    employee = make_employee(start_date=date(2023, 1, 1))

    outcome = calculate_vesting(employee, date(2023, 11, 1))

    assert outcome.vested_units == 0
    assert outcome.unvested_units == 48000
    assert outcome.next_vest_date == date(2024, 1, 1)
    assert outcome.as_of == date(2023, 11, 1)


def test_future_start_date_reports_cliff_date(make_employee) -> None:
    employee = make_employee(start_date=date(2024, 1, 1), total_units=10000)

    outcome = calculate_vesting(employee, date(2023, 1, 1))

    assert outcome.vested_units == 0
    assert outcome.next_vest_date == date(2025, 1, 1)


@pytest.mark.parametrize(
    ("start_date", "as_of", "total_units", "vesting_months", "expected"),
    [
        (date(2022, 1, 1), date(2023, 1, 1), 48000, 48, 0),
        (date(2021, 1, 1), date(2023, 1, 1), 48000, 48, 16000),
        (date(2021, 1, 1), date(2023, 1, 1), 10000, 48, 3333),
        (date(2021, 1, 15), date(2023, 1, 10), 36000, 36, 16500),
        (date(2019, 1, 1), date(2023, 6, 1), 48000, 48, 48000),
    ],
)
def test_linear_vesting(make_employee, start_date, as_of, total_units, vesting_months, expected) -> None:
    employee = make_employee(start_date=start_date, total_units=total_units, vesting_months=vesting_months)

    outcome = calculate_vesting(employee, as_of)

    assert outcome.vested_units == expected
    assert outcome.unvested_units == total_units - expected


def test_linear_vesting_floors_the_exact_quotient(make_employee) -> None:
    employee = make_employee(start_date=date(2021, 1, 1), total_units=48000)

    # 24 of 36 post-cliff months
    assert calculate_vesting(employee, date(2024, 1, 1)).vested_units == 32000
    # 25 of 36: 33333.33
    assert calculate_vesting(employee, date(2024, 2, 1)).vested_units == 33333


def test_fully_vested_has_no_next_vest_date(make_employee) -> None:
    employee = make_employee(start_date=date(2019, 1, 1))

    outcome = calculate_vesting(employee, date(2023, 6, 1))

    assert outcome.fully_vested
    assert outcome.next_vest_date is None


def test_next_vest_date_is_one_month_after_as_of(make_employee) -> None:
    employee = make_employee(start_date=date(2021, 1, 1))

    outcome = calculate_vesting(employee, date(2023, 1, 31))

    assert outcome.next_vest_date == date(2023, 2, 28)


@pytest.mark.parametrize(
    ("start_date", "as_of", "total_units", "expected"),
    [
        (date(2022, 1, 1), date(2023, 1, 1), 40000, 0),
        (date(2021, 1, 1), date(2023, 1, 1), 40000, 4000),
        (date(2021, 1, 1), date(2023, 7, 1), 40000, 8000),
        (date(2020, 1, 1), date(2024, 1, 1), 40000, 24000),
        (date(2019, 1, 1), date(2024, 1, 1), 40000, 40000),
        (date(2018, 1, 1), date(2024, 1, 1), 40000, 40000),
        (date(2021, 1, 1), date(2023, 10, 1), 50000, 12500),
    ],
)
def test_backloaded_vesting(make_employee, start_date, as_of, total_units, expected) -> None:
    employee = make_employee(
        start_date=start_date,
        total_units=total_units,
        vesting_type=VestingType.BACKLOADED,
    )

    outcome = calculate_vesting(employee, as_of)

    assert outcome.vested_units == expected
    assert outcome.vested_units + outcome.unvested_units == total_units


def test_backloaded_partial_year_uses_current_tranche(make_employee) -> None:
    employee = make_employee(start_date=date(2021, 1, 1), total_units=12000, vesting_type=VestingType.BACKLOADED)

    # one month into the first year: 10% * 1/12
    assert calculate_vesting(employee, date(2022, 2, 1)).vested_units == 100


@pytest.mark.parametrize("total_units", [0, -1000])
def test_non_positive_grant_is_rejected(make_employee, total_units) -> None:
    employee = make_employee(total_units=total_units)

    with pytest.raises(InvalidGrant) as exc_info:
        calculate_vesting(employee, date(2023, 1, 1))

    assert exc_info.value.employee_id == "emp1"
    assert exc_info.value.total_units == total_units


def test_unvalidated_unknown_vesting_type_is_rejected() -> None:
    schedule = VestingSchedule.model_construct(cliff_months=12, vesting_months=48, vesting_type="exponential")
    employee = Employee(
        employee_id="odd",
        name="Odd Schedule",
        start_date=date(2020, 1, 1),
        total_units=1000,
        schedule=schedule,
    )

    with pytest.raises(InvalidSchedule):
        calculate_vesting(employee, date(2023, 1, 1))


def test_vested_and_unvested_always_sum_to_total(make_employee) -> None:
    for vesting_type in VestingType:
        employee = make_employee(start_date=date(2020, 3, 31), total_units=9973, vesting_type=vesting_type)
        for year in range(2020, 2027):
            for month in range(1, 13):
                outcome = calculate_vesting(employee, date(year, month, 15))
                assert 0 <= outcome.vested_units <= 9973
                assert outcome.vested_units + outcome.unvested_units == 9973


@pytest.mark.parametrize(
    "schedule",
    [
        VestingSchedule(cliff_months=12, vesting_months=48, vesting_type=VestingType.LINEAR),
        VestingSchedule(cliff_months=12, vesting_months=48, vesting_type=VestingType.BACKLOADED),
        VestingSchedule(cliff_months=0, vesting_months=1, vesting_type="linear"),
        {"cliff_months": 6, "vesting_months": 36, "vesting_type": "backloaded"},
    ],
)
def test_validate_schedule_accepts_well_formed_schedules(schedule) -> None:
    assert validate_schedule(schedule) is None


@pytest.mark.parametrize(
    ("schedule", "message"),
    [
        (VestingSchedule(cliff_months=-1, vesting_months=48, vesting_type=VestingType.LINEAR), "negative"),
        (VestingSchedule(cliff_months=12, vesting_months=12, vesting_type=VestingType.LINEAR), "greater"),
        (VestingSchedule(cliff_months=24, vesting_months=12, vesting_type=VestingType.LINEAR), "greater"),
        ({"cliff_months": 12, "vesting_months": 48, "vesting_type": "exponential"}, "exponential"),
        ({"cliff_months": 12, "vesting_months": 48}, "vesting_type"),
        ({"cliff_months": "12", "vesting_months": 48, "vesting_type": "linear"}, "integer"),
    ],
)
def test_validate_schedule_rejects_bad_schedules(schedule, message) -> None:
    with pytest.raises(InvalidSchedule) as exc_info:
        validate_schedule(schedule)

    assert message in str(exc_info.value)

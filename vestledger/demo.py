import argparse
import logging
import sys
from datetime import date

from vestledger.core.config import get_settings
from vestledger.core.errors import VestingError
from vestledger.core.logging import configure_logging
from vestledger.models import Employee, VestingSchedule, VestingType
from vestledger.services.batch import VestingService

logger = logging.getLogger(__name__)

DEFAULT_AS_OF = date(2023, 6, 1)

SAMPLE_EMPLOYEES = [
    Employee(
        employee_id="emp001",
        name="Alice Johnson",
        start_date=date(2021, 1, 1),
        total_units=48000,
        schedule=VestingSchedule(cliff_months=12, vesting_months=48, vesting_type=VestingType.LINEAR),
    ),
    Employee(
        employee_id="emp002",
        name="Bob Smith",
        start_date=date(2020, 6, 1),
        total_units=60000,
        schedule=VestingSchedule(cliff_months=12, vesting_months=48, vesting_type=VestingType.BACKLOADED),
    ),
    Employee(
        employee_id="emp003",
        name="Carol Davis",
        start_date=date(2022, 3, 15),
        total_units=40000,
        schedule=VestingSchedule(cliff_months=6, vesting_months=36, vesting_type=VestingType.LINEAR),
    ),
]


def render_report(service: VestingService, employees: list[Employee]) -> list[str]:
    lines: list[str] = []
    for employee in employees:
        outcome = service.get_result(employee.employee_id)
        if outcome is None:
            lines.append(f"ERROR: No result found for {employee.name}")
            continue

        schedule = employee.schedule
        percent = outcome.vested_units / employee.total_units * 100
        lines.append(f"Employee: {employee.name}")
        lines.append(f"  Start Date: {employee.start_date.isoformat()}")
        lines.append(f"  Total Units: {employee.total_units}")
        lines.append(
            f"  Vesting Type: {schedule.vesting_type.value} "
            f"({schedule.cliff_months} month cliff, {schedule.vesting_months} months total)"
        )
        lines.append(f"  Vested Units: {outcome.vested_units} ({percent:.1f}%)")
        lines.append(f"  Unvested Units: {outcome.unvested_units}")
        if outcome.fully_vested:
            lines.append("  Status: Fully Vested")
        elif outcome.next_vest_date is not None:
            lines.append(f"  Next Vest Date: {outcome.next_vest_date.isoformat()}")
        lines.append("")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a vesting report for a set of sample employees.")
    parser.add_argument("--as-of", type=date.fromisoformat, default=DEFAULT_AS_OF, help="YYYY-MM-DD")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.debug)
    service = VestingService(max_workers=settings.max_workers)

    print("=== Vesting Calculator ===")
    print(f"Calculating vesting as of: {args.as_of.isoformat()}\n")

    try:
        service.process_batch(SAMPLE_EMPLOYEES, args.as_of)
    except VestingError as exc:
        logger.error("Error processing batch: %s", exc)
        return 1

    for line in render_report(service, SAMPLE_EMPLOYEES):
        print(line)

    print("=== Batch Retrieval Example ===")
    try:
        results = service.get_batch_results(["emp001", "emp002"])
    except VestingError as exc:
        logger.error("Error retrieving batch results: %s", exc)
    else:
        print(f"Successfully retrieved {len(results)} results")
        for employee_id, outcome in results.items():
            print(f"  {employee_id}: {outcome.vested_units} vested units")
    return 0


if __name__ == "__main__":
    sys.exit(main())

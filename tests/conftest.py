from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from vestledger.main import app
from vestledger.models import Employee, VestingSchedule, VestingType


@pytest.fixture()
def make_employee() -> Callable[..., Employee]:
    def _make(
        employee_id: str = "emp1",
        start_date: date = date(2021, 1, 1),
        total_units: int = 48000,
        cliff_months: int = 12,
        vesting_months: int = 48,
        vesting_type: VestingType = VestingType.LINEAR,
    ) -> Employee:
        return Employee(
            employee_id=employee_id,
            name=f"Employee {employee_id}",
            start_date=start_date,
            total_units=total_units,
            schedule=VestingSchedule(
                cliff_months=cliff_months,
                vesting_months=vesting_months,
                vesting_type=vesting_type,
            ),
        )

    return _make


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict


class VestingType(str, Enum):
    LINEAR = "linear"
    BACKLOADED = "backloaded"


class VestingSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    cliff_months: int
    vesting_months: int
    vesting_type: VestingType


class Employee(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: str
    name: str
    start_date: date
    total_units: int
    schedule: VestingSchedule


class VestingOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: str
    vested_units: int
    unvested_units: int
    next_vest_date: date | None
    as_of: date

    @property
    def total_units(self) -> int:
        return self.vested_units + self.unvested_units

    @property
    def fully_vested(self) -> bool:
        return self.unvested_units == 0

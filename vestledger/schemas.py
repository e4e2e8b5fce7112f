from datetime import date

from pydantic import BaseModel, Field

from vestledger.models import Employee


class VestingBatchCreate(BaseModel):
    as_of: date | None = None
    employees: list[Employee] = Field(min_length=1)


class VestingBatchRead(BaseModel):
    as_of: date
    processed: int
    employee_ids: list[str]


class VestingResultsLookup(BaseModel):
    employee_ids: list[str] = Field(min_length=1)


class ScheduleCheck(BaseModel):
    cliff_months: int
    vesting_months: int
    vesting_type: str


class ScheduleCheckResult(BaseModel):
    valid: bool
    detail: str | None = None

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status

from vestledger.api.deps import get_vesting_service
from vestledger.core.errors import InvalidSchedule
from vestledger.models import VestingOutcome
from vestledger.schemas import (
    ScheduleCheck,
    ScheduleCheckResult,
    VestingBatchCreate,
    VestingBatchRead,
    VestingResultsLookup,
)
from vestledger.services.batch import VestingService
from vestledger.services.vesting import validate_schedule

router = APIRouter(prefix="/api/vesting", tags=["vesting"])


@router.post("/batches", response_model=VestingBatchRead)
def process_batch(payload: VestingBatchCreate, service: VestingService = Depends(get_vesting_service)) -> VestingBatchRead:
    effective_date = payload.as_of or date.today()
    service.process_batch(payload.employees, effective_date)
    return VestingBatchRead(
        as_of=effective_date,
        processed=len(payload.employees),
        employee_ids=[employee.employee_id for employee in payload.employees],
    )


@router.get("/results/{employee_id}", response_model=VestingOutcome)
def get_result(employee_id: str, service: VestingService = Depends(get_vesting_service)) -> VestingOutcome:
    outcome = service.get_result(employee_id)
    if outcome is None:
        raise HTTPException(status_code=404, detail=f"result not found for employee {employee_id}")
    return outcome


@router.post("/results/lookup", response_model=dict[str, VestingOutcome])
def lookup_results(
    payload: VestingResultsLookup, service: VestingService = Depends(get_vesting_service)
) -> dict[str, VestingOutcome]:
    return service.get_batch_results(payload.employee_ids)


@router.delete("/results", status_code=status.HTTP_204_NO_CONTENT)
def reset_results(service: VestingService = Depends(get_vesting_service)) -> Response:
    service.reset_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/schedules/validate", response_model=ScheduleCheckResult)
def check_schedule(payload: ScheduleCheck) -> ScheduleCheckResult:
    try:
        validate_schedule(payload.model_dump())
    except InvalidSchedule as exc:
        return ScheduleCheckResult(valid=False, detail=exc.message)
    return ScheduleCheckResult(valid=True)

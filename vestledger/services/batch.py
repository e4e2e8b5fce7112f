import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date

from vestledger.models import Employee, VestingOutcome
from vestledger.services.cache import ResultCache
from vestledger.services.vesting import calculate_vesting

logger = logging.getLogger(__name__)


class VestingService:
    """Runs vesting calculations in parallel and keeps the latest outcomes.

    Workers only ever write through ``ResultCache.put``. Callers read back with
    ``get_result`` and ``get_batch_results``; the cache itself is not exposed.
    """

    def __init__(self, cache: ResultCache | None = None, max_workers: int | None = None) -> None:
        self._cache = cache if cache is not None else ResultCache()
        self._max_workers = max_workers

    def calculate(self, employee: Employee, as_of: date) -> VestingOutcome:
        outcome = calculate_vesting(employee, as_of)
        self._cache.put(employee.employee_id, outcome)
        return outcome

    def process_batch(self, employees: Iterable[Employee], as_of: date) -> None:
        """Calculate every employee concurrently and cache each outcome.

        All calculations run to completion. If any of them failed, the first
        error observed is raised afterwards; outcomes already cached for the
        other employees are kept.
        """
        employees = list(employees)
        if not employees:
            return

        logger.info("Processing vesting batch of %d employee(s) as of %s", len(employees), as_of.isoformat())
        first_error: Exception | None = None
        failures = 0

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="vesting") as pool:
            futures = {pool.submit(self.calculate, employee, as_of): employee for employee in employees}
            for future in as_completed(futures):
                exc = future.exception()
                if exc is None:
                    continue
                failures += 1
                logger.warning("Vesting calculation failed for %s: %s", futures[future].employee_id, exc)
                if first_error is None:
                    first_error = exc

        if first_error is not None:
            logger.info("Vesting batch finished with %d failure(s)", failures)
            raise first_error
        logger.info("Vesting batch finished, %d outcome(s) cached", len(employees))

    def get_result(self, employee_id: str) -> VestingOutcome | None:
        return self._cache.get(employee_id)

    def get_batch_results(self, employee_ids: Iterable[str]) -> dict[str, VestingOutcome]:
        return self._cache.get_many(employee_ids)

    def reset_cache(self) -> None:
        self._cache.reset()

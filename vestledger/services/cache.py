import logging
from collections.abc import Iterable
from threading import Lock

from vestledger.core.errors import NotFound
from vestledger.models import VestingOutcome

logger = logging.getLogger(__name__)


class ResultCache:
    """Thread-safe store of the latest vesting outcome per employee.

    Every read and write of the backing dict happens under ``_lock``.
    """

    def __init__(self) -> None:
        self._results: dict[str, VestingOutcome] = {}
        self._lock = Lock()

    def put(self, employee_id: str, outcome: VestingOutcome) -> None:
        with self._lock:
            self._results[employee_id] = outcome

    def get(self, employee_id: str) -> VestingOutcome | None:
        with self._lock:
            return self._results.get(employee_id)

    def get_many(self, employee_ids: Iterable[str]) -> dict[str, VestingOutcome]:
        results: dict[str, VestingOutcome] = {}
        with self._lock:
            for employee_id in employee_ids:
                outcome = self._results.get(employee_id)
                if outcome is None:
                    raise NotFound(employee_id)
                results[employee_id] = outcome
        return results

    def reset(self) -> None:
        with self._lock:
            discarded = len(self._results)
            self._results = {}
        logger.info("Result cache reset, %d outcome(s) discarded", discarded)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __contains__(self, employee_id: object) -> bool:
        with self._lock:
            return employee_id in self._results

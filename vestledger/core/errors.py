class VestingError(Exception):
    """Base class for every error raised by the vesting engine."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidGrant(VestingError):
    def __init__(self, employee_id: str, total_units: int) -> None:
        super().__init__(f"invalid total units for employee {employee_id}: {total_units}")
        self.employee_id = employee_id
        self.total_units = total_units


class InvalidSchedule(VestingError):
    pass


class NotFound(VestingError):
    status_code = 404

    def __init__(self, employee_id: str) -> None:
        super().__init__(f"result not found for employee {employee_id}")
        self.employee_id = employee_id

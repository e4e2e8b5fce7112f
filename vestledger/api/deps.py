from fastapi import Request

from vestledger.services.batch import VestingService


def get_vesting_service(request: Request) -> VestingService:
    return request.app.state.vesting_service

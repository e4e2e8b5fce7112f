from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vestledger.api.routes.vesting import router as vesting_router
from vestledger.core.config import get_settings
from vestledger.core.errors import VestingError
from vestledger.core.logging import configure_logging
from vestledger.services.batch import VestingService

settings = get_settings()
configure_logging(settings.debug)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.vesting_service = VestingService(max_workers=settings.max_workers)
    yield


app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(vesting_router)


@app.exception_handler(VestingError)
async def vesting_error_handler(_: Request, exc: VestingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}

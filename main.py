from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.errors import ShiftError
from core.logging_config import setup_logging

from gate.router import gate_router
from staff.router import staff_router
from shift.router import shift_router
from gate_coverage.router import coverage_router
import models_bootstrap 

setup_logging()

openapi_tags = [
    {
        "name": "Shifts",
        "description": "Gate shift scheduling",
    },
    {
        "name": "Coverage",
        "description": "Live and historical gate coverage",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title="Gate Shift Scheduler", openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

@app.exception_handler(ShiftError)
def shift_error_handler(request: Request, exc: ShiftError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "error": exc.code})

app.include_router(gate_router, prefix="/api")
app.include_router(staff_router, prefix="/api")
app.include_router(shift_router, prefix="/api")
app.include_router(coverage_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}

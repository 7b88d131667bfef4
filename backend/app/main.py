from contextlib import asynccontextmanager
from fastapi import FastAPI

from core.config import settings
from core.logging_config import configure_logging
from app.startup import run_startup_checks
from modules.payroll.routes.payroll_routes import router as salon_payroll_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_checks()
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Salon Payroll API",
        description="Monthly payroll calculation for salon staff",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.include_router(salon_payroll_router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok", "environment": settings.environment}

    return app


app = create_app()

"""
api/app.py
FastAPI application entry point.
Run with:  uvicorn api.app:app --port 8000
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models import ErrorResponse
from config.settings import settings
from route_planner.errors import PlanningError
from station_catalogue.queries import StationNotFoundError


def _error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=kind, detail=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=(
            "Charging-stop planning for electric-vehicle trips. "
            "Checks whether a trip fits in the battery's safe band and otherwise "
            "ranks up to three charging stations near the straight-line route."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PlanningError)
    async def _planning_handler(request: Request, exc: PlanningError) -> JSONResponse:
        return _error_response(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(StationNotFoundError)
    async def _not_found_handler(request: Request, exc: StationNotFoundError) -> JSONResponse:
        return _error_response(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(Exception)
    async def _global_handler(request: Request, exc: Exception) -> JSONResponse:
        return _error_response(500, "Internal server error", str(exc))

    from api.routes import router
    app.include_router(router, prefix="/api/v1", tags=["Route Planning"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.app:app", host=settings.api_host, port=settings.api_port, log_level="info")

"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from weight_planner.api.history import router as history_router
from weight_planner.api.logs import router as logs_router
from weight_planner.api.plans import router as plans_router
from weight_planner.api.schemas import BiometricsPayload, ProfilePayload
from weight_planner.app_logging import configure_logging
from weight_planner.containers import AppContainer
from weight_planner.domain.metrics import CalculationResult
from weight_planner.domain.models import Profile
from weight_planner.services.calculator import (
    ACTIVITY_DESCRIPTIONS,
    ACTIVITY_MULTIPLIERS,
)
from weight_planner.services.plans import PlanNotFoundError, PlanValidationError
from weight_planner.services.profiles import ProfileNotFoundError
from weight_planner.services.weight_logs import WeightLogNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Weight Planner")
    app.state.container = container

    app.include_router(plans_router)
    app.include_router(logs_router)
    app.include_router(history_router)

    @app.exception_handler(PlanValidationError)
    async def plan_validation_error(
        request: Request, exc: PlanValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ProfileNotFoundError)
    async def profile_not_found(
        request: Request, exc: ProfileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(PlanNotFoundError)
    @app.exception_handler(WeightLogNotFoundError)
    async def record_not_found(request: Request, exc: LookupError) -> JSONResponse:
        logger.info("Record not found: path=%s id=%s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not found"}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/activity-levels")
    async def activity_levels() -> dict[str, object]:
        """Return activity levels with their descriptions and multipliers."""
        return {
            "levels": [
                {
                    "value": level.value,
                    "description": ACTIVITY_DESCRIPTIONS[level],
                    "multiplier": ACTIVITY_MULTIPLIERS[level],
                }
                for level in ACTIVITY_DESCRIPTIONS
            ]
        }

    @app.get("/profile")
    async def get_profile(request: Request) -> Profile:
        """Return the stored profile."""
        state_container: AppContainer = request.app.state.container
        return state_container.profile_service.require_profile()

    @app.post("/profile", status_code=status.HTTP_201_CREATED)
    async def create_profile(payload: ProfilePayload, request: Request) -> Profile:
        """Create the profile and seed the first weight entry."""
        state_container: AppContainer = request.app.state.container
        if state_container.profile_service.load_profile() is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Profile already exists",
            )
        return state_container.profile_service.create_profile(
            height=payload.height,
            current_weight=payload.current_weight,
            age=payload.age,
            gender=payload.gender,
            activity_level=payload.activity_level,
        )

    @app.put("/profile")
    async def update_profile(payload: BiometricsPayload, request: Request) -> Profile:
        """Update the stored biometrics."""
        state_container: AppContainer = request.app.state.container
        return state_container.profile_service.update_biometrics(
            height=payload.height,
            age=payload.age,
            gender=payload.gender,
            activity_level=payload.activity_level,
        )

    @app.get("/metrics")
    async def metrics(request: Request) -> dict[str, CalculationResult | None]:
        """Return the calorie target for the active plan."""
        state_container: AppContainer = request.app.state.container
        return {"metrics": state_container.profile_service.get_metrics()}

    return app

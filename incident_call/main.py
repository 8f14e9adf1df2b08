"""
FastAPI application initialization for the Incident Teams Call service.
"""

from typing import Optional

from fastapi import FastAPI

from incident_call.api.v1.endpoints import incidents
from incident_call.api.v1.router import api_router
from incident_call.core.config import Settings, get_settings
from incident_call.core.logging import get_logger, setup_logging
from incident_call.services.incident_call_service import IncidentCallService


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[IncidentCallService] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from the environment when omitted
        service: Call service; built from ``settings`` when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    setup_logging(log_level=settings.log_level, enable_file_logging=settings.log_to_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        description="Creates a Teams meeting for an incident and emails the join link",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.state.settings = settings
    app.state.incident_call_service = service or IncidentCallService(settings)

    app.include_router(api_router, prefix="/api/v1")
    # Function-style trigger path
    app.add_api_route("/api/TeamsCall", incidents.teams_call, methods=["POST"], tags=["Incidents"])

    @app.on_event("startup")
    async def startup_event():
        """Report configuration state; credentials are never logged."""
        logger = get_logger("startup")
        missing = settings.missing_fields()
        if missing:
            logger.warning(f"Incident call service started without: {', '.join(missing)}")
        else:
            logger.info(f"Incident call service started for organizer {settings.organizer_upn}")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "incident_call.main:app",
        host=app.state.settings.host,
        port=app.state.settings.port,
        reload=app.state.settings.debug,
        log_level=app.state.settings.log_level.lower(),
    )

"""
Dependency injection for the Incident Teams Call API.
Provides the application's settings and call service to endpoints.
"""

from fastapi import Depends, Request

from incident_call.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_incident_call_service(request: Request):
    """
    Dependency injection for the incident call service.

    Returns:
        IncidentCallService instance attached at app creation
    """
    return request.app.state.incident_call_service


IncidentCallServiceDep = Depends(get_incident_call_service)
SettingsDep = Depends(get_app_settings)

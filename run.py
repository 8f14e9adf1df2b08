"""
Entry point for the Incident Teams Call API.
Starts the FastAPI application with uvicorn.
"""

import sys

import uvicorn

from incident_call.core.config import get_settings


def run():
    """Run the Incident Teams Call API server."""
    settings = get_settings()
    print("\n" + "=" * 60)
    print("INCIDENT TEAMS CALL API")
    print("=" * 60)
    print(f"Host: {settings.host}:{settings.port}")
    print(f"Trigger: POST http://{settings.host}:{settings.port}/api/TeamsCall")
    print(f"API Docs: http://{settings.host}:{settings.port}/api/docs")
    print("=" * 60 + "\n")

    uvicorn.run(
        "incident_call.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    try:
        run()
    except KeyboardInterrupt:
        print("\nGoodbye!")
    except Exception as e:
        print(f"\nFatal error: {e}")
        sys.exit(1)

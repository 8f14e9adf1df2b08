"""
Incident call trigger endpoint.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from incident_call.api.v1.schemas.incident import ErrorResponse, IncidentCallResponse, IncidentRequest
from incident_call.core.dependencies import IncidentCallServiceDep
from incident_call.core.exceptions import IncidentCallError, ValidationError
from incident_call.core.logging import get_logger

router = APIRouter()
logger = get_logger("api.incidents")


async def read_json_body(request: Request):
    """Decoded JSON body, or an empty object when the body is absent or not JSON."""
    body = await request.body()
    if not body:
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.warning("Request body is not valid JSON, treating as empty")
        return {}


@router.post(
    "/teams-call",
    response_model=IncidentCallResponse,
    responses={400: {"content": {"text/plain": {}}}, 500: {"model": ErrorResponse}},
    tags=["Incidents"],
)
async def teams_call(request: Request, service=IncidentCallServiceDep) -> Response:
    """
    Create a Teams meeting for an incident and email the join link.

    Returns:
        200 with meetingId and joinUrl, 400 plain text on a bad request,
        500 with an error message when any downstream call fails
    """
    logger.info("Incident call triggered")

    try:
        incident = IncidentRequest.from_payload(await read_json_body(request))
    except ValidationError as e:
        logger.warning(f"Rejected incident call: {e.message}")
        return PlainTextResponse(e.message, status_code=400)

    try:
        result = await service.run(incident)
    except IncidentCallError as e:
        return JSONResponse({"error": e.message}, status_code=500)
    except Exception as e:
        logger.exception(f"Unexpected incident call failure: {e}")
        return JSONResponse({"error": str(e) or type(e).__name__}, status_code=500)

    return JSONResponse(
        IncidentCallResponse(meetingId=result.meeting_id, joinUrl=result.join_url).model_dump(),
        status_code=200,
    )

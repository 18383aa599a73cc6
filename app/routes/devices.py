"""Single action endpoint for device registration, sessions and push dispatch."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import logging

from app.core.dependencies import get_action_handler
from app.schemas.device import ResultKind
from app.services.actions import ActionHandler

logger = logging.getLogger("app.devices.routes")
router = APIRouter()

STATUS_BY_KIND = {
    ResultKind.success: 200,
    ResultKind.invalid_input: 400,
    ResultKind.unauthorized: 401,
    ResultKind.not_found: 404,
    ResultKind.internal_error: 500,
}


@router.api_route("/function", methods=["GET", "POST"])
def run_action(request: Request, handler: ActionHandler = Depends(get_action_handler)):
    """Run the operation named by the `action` query parameter.

    Parameters are read from the query string, e.g.
    `?action=login&username=ana&password=...&fcmtoken=...`.
    """
    # Parameter names are case-insensitive: fcmToken and fcmtoken are the same
    params = {k.lower(): v for k, v in request.query_params.items()}
    action = params.pop("action", None)
    result = handler.handle(action, params)

    status_code = STATUS_BY_KIND[result.kind]
    if result.is_success and action.strip().lower() == "registerdevice":
        status_code = 201
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))

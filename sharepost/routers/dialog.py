import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from sharepost.models.dialog import DialogOutcome, SubmitDialogRequest
from sharepost.services import share as share_service

logger = logging.getLogger(__name__)

USER_ID_HEADER = "Mattermost-User-ID"

router = APIRouter(prefix="/api/v1", tags=["dialog"])

# Registered by the app only when the enable_move_route setting is on.
move_router = APIRouter(prefix="/api/v1", tags=["dialog"])


async def submitted_dialog(request: Request) -> SubmitDialogRequest:
    """Decode the dialog payload and check it was submitted by the caller."""
    body = await request.body()
    try:
        dialog = SubmitDialogRequest.model_validate_json(body)
    except ValidationError:
        logger.warning("Failed to decode SubmitDialogRequest")
        raise HTTPException(status_code=400, detail="invalid request")

    if dialog.user_id != request.headers.get(USER_ID_HEADER):
        logger.warning("Dialog submitted for a different user than the caller")
        raise HTTPException(status_code=401, detail="not authorized")
    return dialog


def _respond(dialog: SubmitDialogRequest, outcome: DialogOutcome) -> Response:
    if outcome.message:
        share_service.notify_user(dialog.channel_id, dialog.user_id, outcome.message)
    if outcome.response is None:
        return Response(status_code=200)
    return JSONResponse(content=outcome.response.model_dump(exclude_none=True))


@router.post("/share")
def share(dialog: SubmitDialogRequest = Depends(submitted_dialog)) -> Response:
    return _respond(dialog, share_service.handle_share_dialog(dialog))


@move_router.post("/move")
def move(dialog: SubmitDialogRequest = Depends(submitted_dialog)) -> Response:
    return _respond(dialog, share_service.handle_move_dialog(dialog))

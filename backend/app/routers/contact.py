# app/routers/contact.py
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.mailer import MailDispatcher, TransportError
from app.core.settings import Settings
from app.dependencies import get_dispatcher, get_settings
from app.lib.contact_schema import (
    build_outbound_message,
    malformed_body_error,
    parse_submission,
    validate,
)

router = APIRouter(tags=["contact"])

@router.post("/contact")
async def contact(
    request: Request,
    dispatcher: MailDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
):
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        return JSONResponse(malformed_body_error(str(exc)), status_code=400)

    errors = validate(payload)
    if errors:
        return JSONResponse(errors, status_code=200 if settings.legacy_status_codes else 400)

    submission = parse_submission(payload)
    message = build_outbound_message(
        submission,
        sender_address=dispatcher.config.sender_address,
        recipients=dispatcher.config.recipients,
    )
    try:
        receipt = await dispatcher.send(message)
    except TransportError as exc:
        return JSONResponse(exc.to_dict(), status_code=200 if settings.legacy_status_codes else 502)

    return {"messageId": receipt.message_id, "response": receipt.response, "OK": True}

"""SMS webhook endpoints for Twilio."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import Response
from twilio.twiml.messaging_response import MessagingResponse

from waitlist.api.deps import get_context, get_sms_service
from waitlist.core.context import ServiceContext
from waitlist.domain.services.sms_service import SmsService

logger = logging.getLogger(__name__)


async def verify_twilio_request(
    request: Request,
    context: Annotated[ServiceContext, Depends(get_context)],
) -> None:
    """Reject unsigned webhooks when signature validation is switched on.

    The configured SMS provider holds the auth token and checks the
    ``X-Twilio-Signature`` header against the full URL and form params.
    """
    if not context.settings.twilio_validate_signature:
        return

    provider = context.sms_provider
    if provider is None:
        logger.error("Twilio signature validation enabled without Twilio credentials")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")

    signature = request.headers.get("X-Twilio-Signature", "")
    if not signature:
        logger.warning("Missing X-Twilio-Signature header")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")

    form_data = await request.form()
    params = {key: form_data[key] for key in form_data}
    if not provider.validate_webhook_signature(str(request.url), params, signature):
        logger.warning("Invalid Twilio signature on SMS webhook")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")


def twiml_message(text: str) -> Response:
    """Wrap a reply in a TwiML <Message>."""
    twiml = MessagingResponse()
    twiml.message(text)
    return Response(content=str(twiml), media_type="text/xml")


router = APIRouter(dependencies=[Depends(verify_twilio_request)])


@router.post("/inbound")
async def inbound_sms_webhook(
    service: Annotated[SmsService, Depends(get_sms_service)],
    From: Annotated[str | None, Form()] = None,
    Body: Annotated[str | None, Form()] = None,
) -> Response:
    """Handle inbound SMS replies (STOP/HELP/START).

    Returns:
        TwiML reply for keywords, empty 204 for anything else,
        empty 400 if the sender is missing
    """
    if not From:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    result = await service.process_inbound_sms(phone_number=From, message_body=Body)

    if result.response_message is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return twiml_message(result.response_message)


@router.post("/status")
async def sms_status_callback(
    MessageSid: Annotated[str | None, Form()] = None,
    MessageStatus: Annotated[str | None, Form()] = None,
    To: Annotated[str | None, Form()] = None,
    ErrorCode: Annotated[str | None, Form()] = None,
) -> Response:
    """Log SMS delivery status callbacks from Twilio."""
    logger.info(
        f"SMS delivery status: MessageSid={MessageSid}, Status={MessageStatus}",
        extra={
            "message_sid": MessageSid,
            "message_status": MessageStatus,
            "to_number": To,
            "error_code": ErrorCode,
        },
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

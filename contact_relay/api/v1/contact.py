from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from contact_relay.config.settings import CORS_HEADERS, Settings, get_settings
from contact_relay.schemas.contact import ContactReply
from contact_relay.services.contact_service import handle_contact_request

router = APIRouter()

# Every method is routed here so that anything but POST/OPTIONS gets our 405 body
CONTACT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def get_email_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport used for outbound provider calls; None means the real network"""
    return None


def render_reply(reply: ContactReply) -> Response:
    if reply.body is None:
        return Response(content=b"", status_code=reply.status_code, headers=CORS_HEADERS)
    return JSONResponse(content=reply.body, status_code=reply.status_code, headers=CORS_HEADERS)


@router.api_route("/", methods=CONTACT_METHODS)
async def contact_handler(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_email_transport),
):
    """
    Contact form endpoint

    - **POST**: JSON body with `name`, `email` and `message`; relays it by email
    - **OPTIONS**: CORS preflight, empty 200
    """
    raw_body = None
    if request.method == "POST":
        raw_body = await request.body()
    reply = await handle_contact_request(request.method, raw_body, settings, transport)
    return render_reply(reply)

"""
Serverless entrypoint for the contact form (Netlify Functions / AWS Lambda
behind API Gateway). Deploy with ``contact_relay.handler.handler`` as the
handler name.
"""

import asyncio
import base64
import json
import logging
from typing import Any, Dict, Optional

import httpx

from contact_relay.config.settings import CORS_HEADERS, Settings, get_settings
from contact_relay.exceptions import ConfigurationError
from contact_relay.schemas.contact import ContactReply
from contact_relay.services.contact_service import error_reply, handle_contact_request

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def _event_body(event: Dict[str, Any]) -> Optional[str]:
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        body = base64.b64decode(body, validate=True).decode("utf-8")
    return body


def to_proxy_response(reply: ContactReply) -> Dict[str, Any]:
    return {
        "statusCode": reply.status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(reply.body) if reply.body is not None else "",
    }


def build_handler(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
    """Create a handler bound to the given settings (environment settings when omitted)"""

    def handler(event, context):
        try:
            resolved = settings or get_settings()
        except ValueError as exc:
            logger.error(f"Invalid contact relay configuration: {exc}")
            return to_proxy_response(error_reply(ConfigurationError(), Settings()))
        method = event.get("httpMethod") or ""
        logger.info(f"Contact function invoked: {method}")
        try:
            body = _event_body(event) if method.upper() == "POST" else None
        except ValueError as exc:
            logger.error(f"Could not decode request body: {exc}")
            return to_proxy_response(error_reply(exc, resolved))
        reply = asyncio.run(handle_contact_request(method, body, resolved, transport))
        return to_proxy_response(reply)

    return handler


handler = build_handler()

import json
import logging
import re
from typing import Any, List, Optional, Union

import httpx

from contact_relay.config.settings import (
    ACKNOWLEDGEMENT_SUBJECT,
    EMAIL_FROM,
    NOTIFICATION_SUBJECT,
    OPERATOR_EMAIL,
    Settings,
)
from contact_relay.exceptions import (
    BadRequest,
    ConfigurationError,
    ContactError,
    EmailProviderError,
    EmailSendError,
    MethodNotAllowed,
)
from contact_relay.schemas.contact import (
    ContactErrorResponse,
    ContactReply,
    ContactResponse,
    ContactSubmission,
    EmailMessage,
)
from contact_relay.services.email_service import ResendEmailService
from contact_relay.utils.email_templates import render_acknowledgement_html, render_notification_html

logger = logging.getLogger(__name__)

# Same set as \s in JavaScript regexes
WHITESPACE = "\t\n\x0b\x0c\r \xa0" + "".join(
    chr(code) for code in (0x1680, *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF)
)
EMAIL_PATTERN = re.compile(rf"[^{WHITESPACE}@]+@[^{WHITESPACE}@]+\.[^{WHITESPACE}@]+")
REQUIRED_FIELDS = ("name", "email", "message")
SUCCESS_MESSAGE = "Emails sent successfully"


def check_method(method: str) -> None:
    if method.upper() not in ("POST", "OPTIONS"):
        logger.warning(f"Rejected contact request with method {method}")
        raise MethodNotAllowed()


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def parse_submission(raw_body: Union[str, bytes, None]) -> ContactSubmission:
    """
    Parse and validate a contact form body

    Raises:
        BadRequest: a field is missing, empty or not text, or the email is malformed
        ValueError: the body is not JSON at all
    """
    if raw_body is None:
        raise ValueError("Request body is empty")
    data: Any = json.loads(raw_body)
    if not isinstance(data, dict):
        data = {}

    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        logger.warning(f"Contact submission rejected, missing fields: {', '.join(missing)}")
        raise BadRequest("Missing required fields")

    if not all(isinstance(data[field], str) for field in REQUIRED_FIELDS):
        logger.warning("Contact submission rejected, non-text field values")
        raise BadRequest("Missing required fields")

    if not is_valid_email(data["email"]):
        logger.warning("Contact submission rejected, invalid email address")
        raise BadRequest("Invalid email")

    return ContactSubmission(name=data["name"], email=data["email"], message=data["message"])


def build_notification(submission: ContactSubmission) -> EmailMessage:
    return EmailMessage(
        sender=EMAIL_FROM,
        to=OPERATOR_EMAIL,
        reply_to=submission.email,
        subject=NOTIFICATION_SUBJECT.format(name=submission.name),
        html=render_notification_html(submission),
    )


def build_acknowledgement(submission: ContactSubmission) -> EmailMessage:
    return EmailMessage(
        sender=EMAIL_FROM,
        to=submission.email,
        reply_to=OPERATOR_EMAIL,
        subject=ACKNOWLEDGEMENT_SUBJECT,
        html=render_acknowledgement_html(submission),
    )


class ContactService:
    """Relays validated submissions to the operator (and optionally back to the sender)"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def build_messages(self, submission: ContactSubmission) -> List[EmailMessage]:
        messages = [build_notification(submission)]
        if self.settings.dispatch_mode == "dual":
            messages.append(build_acknowledgement(submission))
        return messages

    async def relay(self, submission: ContactSubmission) -> None:
        if not self.settings.resend_api_key:
            logger.error("ERROR: RESEND_API_KEY is not configured")
            raise ConfigurationError()

        email_service = ResendEmailService(self.settings.resend_api_key, transport=self.transport)
        # Sent one after the other; the first rejection ends the request
        for message in self.build_messages(submission):
            try:
                await email_service.send_email(message)
            except EmailProviderError as exc:
                raise EmailSendError() from exc

        logger.info(f"Contact form relayed for {submission.name} ({submission.email})")


def preflight_reply() -> ContactReply:
    return ContactReply(status_code=200, body=None)


def success_reply() -> ContactReply:
    return ContactReply(status_code=200, body=ContactResponse(message=SUCCESS_MESSAGE).model_dump())


def error_reply(exc: Exception, settings: Settings) -> ContactReply:
    """Turn any exception into the uniform error reply"""
    if isinstance(exc, ContactError):
        status_code, error = exc.status_code, exc.message
    else:
        status_code, error = 500, EmailSendError.message

    details = None
    if settings.is_development and status_code >= 500 and not isinstance(exc, ConfigurationError):
        cause = exc.__cause__ if isinstance(exc, EmailSendError) and exc.__cause__ else exc
        details = str(cause)

    body = ContactErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return ContactReply(status_code=status_code, body=body)


async def handle_contact_request(
    method: str,
    raw_body: Union[str, bytes, None],
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ContactReply:
    """
    Run one contact request end to end

    Never raises: validation failures, provider failures and anything unexpected
    all come back as a ContactReply.
    """
    try:
        check_method(method)
        if method.upper() == "OPTIONS":
            return preflight_reply()

        submission = parse_submission(raw_body)
        await ContactService(settings, transport).relay(submission)
        return success_reply()

    except (MethodNotAllowed, BadRequest) as exc:
        return error_reply(exc, settings)
    except Exception as exc:
        logger.exception(f"Error in contact handler: {exc}")
        return error_reply(exc, settings)

"""
Error types for the contact relay.

``ContactError`` subclasses map straight to an HTTP reply: they carry the
status code and a message that is safe to show the caller. ``EmailProviderError``
is internal and never rendered as-is.
"""

from typing import Optional


class ContactError(Exception):
    """Base class for errors that end a contact request with a reply"""
    status_code = 500
    message = "Error processing the request"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MethodNotAllowed(ContactError):
    status_code = 405
    message = "Method not allowed"


class BadRequest(ContactError):
    status_code = 400
    message = "Invalid request"


class ConfigurationError(ContactError):
    """Raised when the server is missing configuration it needs to send mail"""
    status_code = 500
    message = "Server configuration incomplete"


class EmailSendError(ContactError):
    status_code = 500
    message = "Error processing the request"


class EmailProviderError(Exception):
    """The email provider rejected a message or could not be reached"""

    def __init__(self, status_code: Optional[int] = None, body: str = "", cause: Optional[Exception] = None):
        self.status_code = status_code
        self.body = body
        self.cause = cause
        if cause is not None:
            detail = f"Resend API request failed: {cause}"
        else:
            detail = f"Resend API error: {status_code} - {body}"
        super().__init__(detail)

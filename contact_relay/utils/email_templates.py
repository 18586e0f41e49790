from contact_relay.schemas.contact import ContactSubmission
from contact_relay.utils.html import escape_html, escape_multiline
from contact_relay.config.settings import BRAND_NAME, OPERATOR_EMAIL

_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: linear-gradient(135deg, #6366f1 0%, #8b5cf6 50%, #a855f7 100%);
              color: white; padding: 30px; text-align: center; border-radius: 8px 8px 0 0; }
    .content { background: #f9fafb; padding: 30px; border-radius: 0 0 8px 8px; }
    .field { margin-bottom: 20px; }
    .label { font-weight: bold; color: #6366f1; margin-bottom: 5px; }
    .value { background: white; padding: 15px; border-radius: 6px; border-left: 3px solid #8b5cf6; }
"""

_NOTIFICATION_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <style>{style}</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>🚀 New Inquiry - {brand}</h1>
    </div>
    <div class="content">
      <div class="field">
        <div class="label">Name:</div>
        <div class="value">{name}</div>
      </div>
      <div class="field">
        <div class="label">Email:</div>
        <div class="value"><a href="mailto:{email}">{email}</a></div>
      </div>
      <div class="field">
        <div class="label">Message:</div>
        <div class="value">{message}</div>
      </div>
      <p style="margin-top: 30px; color: #666; font-size: 14px;">
        📧 Reply directly to {email}
      </p>
    </div>
  </div>
</body>
</html>
"""

_ACKNOWLEDGEMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <style>{style}</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>Thanks for reaching out, {name}!</h1>
    </div>
    <div class="content">
      <p>We received your message and will get back to you shortly.</p>
      <div class="field">
        <div class="label">Your message:</div>
        <div class="value">{message}</div>
      </div>
      <p style="margin-top: 30px; color: #666; font-size: 14px;">
        The {brand} team &middot; <a href="mailto:{operator}">{operator}</a>
      </p>
    </div>
  </div>
</body>
</html>
"""


def render_notification_html(submission: ContactSubmission) -> str:
    """Body of the email sent to the operator for a new submission"""
    return _NOTIFICATION_TEMPLATE.format(
        style=_STYLE,
        brand=BRAND_NAME,
        name=escape_html(submission.name),
        email=escape_html(submission.email),
        message=escape_multiline(submission.message),
    )


def render_acknowledgement_html(submission: ContactSubmission) -> str:
    """Body of the confirmation email sent back to the submitter"""
    return _ACKNOWLEDGEMENT_TEMPLATE.format(
        style=_STYLE,
        brand=BRAND_NAME,
        operator=OPERATOR_EMAIL,
        name=escape_html(submission.name),
        message=escape_multiline(submission.message),
    )

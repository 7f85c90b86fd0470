from typing import Optional

from fastapi_mail import MessageSchema, MessageType, MultipartSubtypeEnum

from core.logger import init_logger
from core.mail import get_fast_mail

contact_logger = init_logger("contact-logger")

# same replacement set as validator.js escape()
_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


def escape_html(value: str) -> str:
    return value.translate(_HTML_ESCAPES)

def process_message(message: str) -> None:
    """`message` is already trimmed and escaped before it gets here."""
    contact_logger.info(f"Contact message received: {message}")


async def send_contact_notification(message: str, owner_email: Optional[str]) -> None:
    if not owner_email:
        contact_logger.warning("MAIL_ENABLED is set but OWNER_EMAIL is not, contact notification skipped")
        return

    html = f"""
    <div style="font-family: Arial, sans-serif; padding: 15px; border: 1px solid #eee; border-radius: 8px;">
        <h2 style="color: #4F46E5;">New Contact Message</h2>
        <div style="border-left: 3px solid #ccc; padding-left: 10px; margin-top: 5px; white-space: pre-wrap;">
            {message}
        </div>
    </div>
    """

    try:
        message_data = MessageSchema(
            subject="New Contact Message",
            recipients=[owner_email],
            body=html,
            subtype=MessageType.html,
            multipart_subtype=MultipartSubtypeEnum.alternative,
        )
        await get_fast_mail().send_message(message_data)
    except Exception:
        # background task: the response has already been sent
        contact_logger.exception("Contact notification email could not be sent")

from fastapi import APIRouter, status, BackgroundTasks, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from schemas.contact import ContactMessage
from services.contact_service import escape_html, process_message, send_contact_notification

router = APIRouter()


def escaped_message(data: ContactMessage, request: Request) -> str:
    """Length check against the app's own settings, then escape."""
    max_length = request.app.state.settings.CONTACT_MESSAGE_MAX_LENGTH
    if len(data.message) > max_length:
        raise RequestValidationError([{
            "type": "string_too_long",
            "loc": ("body", "message"),
            "msg": f"Message too long (max {max_length} characters)",
            "input": data.message,
        }])
    return escape_html(data.message)


@router.post("/api/contact", status_code=status.HTTP_200_OK, response_class=PlainTextResponse)
async def contact_message(
    request: Request,
    background_tasks: BackgroundTasks,
    message: str = Depends(escaped_message),
):
    process_message(message)

    app_settings = request.app.state.settings
    if app_settings.MAIL_ENABLED:
        background_tasks.add_task(send_contact_notification, message, app_settings.OWNER_EMAIL)

    return "Message received!"

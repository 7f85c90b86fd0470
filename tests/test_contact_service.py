import asyncio

from services import contact_service
from services.contact_service import escape_html


def test_escape_html_replaces_markup_characters():
    assert escape_html("<a href=\"/x\">Tom & 'Jerry'</a>") == (
        "&lt;a href=&quot;&#x2F;x&quot;&gt;Tom &amp; &#x27;Jerry&#x27;&lt;&#x2F;a&gt;"
    )
    assert escape_html("back\\slash `tick`") == "back&#x5C;slash &#96;tick&#96;"


def test_escape_html_leaves_plain_text_alone():
    assert escape_html("Hello, world") == "Hello, world"


class FakeMailer:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    async def send_message(self, message):
        if self.error:
            raise self.error
        self.sent.append(message)


def test_notification_is_mailed_to_owner(monkeypatch):
    mailer = FakeMailer()
    monkeypatch.setattr(contact_service, "get_fast_mail", lambda: mailer)

    asyncio.run(contact_service.send_contact_notification("Tom &amp; Jerry", "owner@example.com"))

    assert len(mailer.sent) == 1
    message = mailer.sent[0]
    assert message.subject == "New Contact Message"
    assert len(message.recipients) == 1
    assert "owner@example.com" in str(message.recipients[0])
    assert "Tom &amp; Jerry" in message.body


def test_notification_failure_is_logged(monkeypatch, caplog):
    mailer = FakeMailer(error=ConnectionError("smtp down"))
    monkeypatch.setattr(contact_service, "get_fast_mail", lambda: mailer)

    asyncio.run(contact_service.send_contact_notification("hello", "owner@example.com"))

    assert "could not be sent" in caplog.text


def test_notification_without_owner_is_skipped(monkeypatch, caplog):
    mailer = FakeMailer()
    monkeypatch.setattr(contact_service, "get_fast_mail", lambda: mailer)

    asyncio.run(contact_service.send_contact_notification("hello", None))

    assert mailer.sent == []
    assert "OWNER_EMAIL is not" in caplog.text


def test_invalid_owner_address_is_logged(monkeypatch, caplog):
    mailer = FakeMailer()
    monkeypatch.setattr(contact_service, "get_fast_mail", lambda: mailer)

    asyncio.run(contact_service.send_contact_notification("hello", "not-an-address"))

    assert mailer.sent == []
    assert "could not be sent" in caplog.text

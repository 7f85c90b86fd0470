import json

import httpx
import pytest

from client.contact_form import ContactClient, ContactForm, sanitize_input


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("<script>alert('x')</script>", "alert('x')"),
        ("Hi <b>there</b>!", "Hi there!"),
        ("<img src=x onerror=alert(1)>caption", "caption"),
        ("unterminated <script", "unterminated "),
        ("line one<br>\nline two", "line one\nline two"),
        ("2 > 1 and plain text", "2 > 1 and plain text"),
        ("", ""),
    ],
)
def test_sanitize_input_strips_tags(raw, expected):
    assert sanitize_input(raw) == expected


def test_sanitized_text_has_no_tag_left():
    raw = "<div><script>steal()</script><p onclick='x()'>text</p></div>"
    cleaned = sanitize_input(raw)
    assert "<" not in cleaned
    assert cleaned == "steal()text"


def test_form_submits_sanitized_message_and_resets(client):
    form = ContactForm(ContactClient(http_client=client))
    form.on_change("Hello <b>world</b>")
    result = form.handle_submit()
    assert result.accepted
    assert result.text == "Message received!"
    assert form.message == ""


def test_form_keeps_state_when_rejected(client):
    form = ContactForm(ContactClient(http_client=client))
    form.on_change("<b></b>")
    result = form.handle_submit()
    assert result.status_code == 400
    assert not result.accepted
    assert result.errors[0]["path"] == "message"
    assert form.message == "<b></b>"


def test_client_sends_json_body():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(200, text="Message received!")

    http_client = httpx.Client(base_url="https://portfolio.example", transport=httpx.MockTransport(handler))
    with ContactClient(http_client=http_client) as contact_client:
        result = contact_client.send("hi")
    assert result.accepted
    assert seen["path"] == "/api/contact"
    assert json.loads(seen["body"]) == {"message": "hi"}


def test_client_reraises_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http_client = httpx.Client(base_url="https://portfolio.example", transport=httpx.MockTransport(handler))
    with pytest.raises(httpx.ConnectError):
        ContactClient(http_client=http_client).send("hi")

"""
Python counterpart of the contact form on the static page.

`ContactForm` keeps the message as local state, strips tag-like substrings
before submitting and hands the sanitized copy to a `ContactClient`, which
posts it to the contact endpoint. Stripping is a display level cleanup only;
the endpoint trims and escapes again and its result is authoritative.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from core.logger import init_logger

client_logger = init_logger("contact-client")

TAG_PATTERN = re.compile(r"<[^>]*>?", re.MULTILINE)


def sanitize_input(text: str) -> str:
    """Remove every `<...>` substring, including an unterminated trailing `<...`."""
    return TAG_PATTERN.sub("", text)


@dataclass
class SubmissionResult:
    status_code: int
    text: str
    errors: List[dict] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.status_code == 200


class ContactClient:
    """Posts contact messages to `<base_url>/api/contact`."""

    def __init__(self, base_url: str = "", timeout: float = 10.0, http_client: Optional[httpx.Client] = None):
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def send(self, message: str) -> SubmissionResult:
        try:
            response = self._client.post("/api/contact", json={"message": message})
        except httpx.HTTPError as http_err:
            client_logger.error(f"Contact submission failed: {http_err}")
            raise

        errors = []
        if response.status_code == 400:
            errors = response.json().get("errors", [])
        elif response.status_code != 200:
            client_logger.warning(f"Contact endpoint answered {response.status_code}: {response.text}")
        return SubmissionResult(status_code=response.status_code, text=response.text, errors=errors)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class ContactForm:

    def __init__(self, client: ContactClient):
        self.client = client
        self.message = ""

    def on_change(self, value: str) -> None:
        self.message = value

    def handle_submit(self) -> SubmissionResult:
        sanitized_message = sanitize_input(self.message)
        result = self.client.send(sanitized_message)
        if result.accepted:
            self.message = ""
        return result

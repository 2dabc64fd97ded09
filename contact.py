from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Protocol

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}


class ContactSubmission(BaseModel):
    """Sanitised contact-form record handed to a sink."""

    name: str
    email: str
    subject: str
    message: str
    timestamp: str
    user_agent: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ContactSink(Protocol):
    def deliver(self, submission: ContactSubmission) -> None:
        ...


class LoggingContactSink:
    """Default sink: records the submission in the application log.

    Real delivery (mail service, chat webhook, storage) plugs in behind the
    same ``deliver`` call and owns its own retry behaviour.
    """

    def deliver(self, submission: ContactSubmission) -> None:
        logger.info("Contact form submission: %s", submission.model_dump_json(by_alias=True))


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def validate_contact(data: Any) -> List[str]:
    """Return every problem with the form, empty when it is acceptable."""
    if not isinstance(data, dict):
        data = {}
    errors: List[str] = []
    if len(_text(data, "name")) < 2:
        errors.append("Name must be at least 2 characters")
    if not EMAIL_RE.match(_text(data, "email")):
        errors.append("Valid email is required")
    if not _text(data, "subject"):
        errors.append("Subject is required")
    if len(_text(data, "message")) < 10:
        errors.append("Message must be at least 10 characters")
    return errors


def sanitize(value: str) -> str:
    for char, entity in _ESCAPES.items():
        value = value.replace(char, entity)
    return value.strip()


def build_submission(data: Dict[str, Any], user_agent: str | None) -> ContactSubmission:
    return ContactSubmission(
        name=sanitize(data["name"]),
        email=sanitize(data["email"]),
        subject=sanitize(data["subject"]),
        message=sanitize(data["message"]),
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        user_agent=user_agent or "unknown",
    )

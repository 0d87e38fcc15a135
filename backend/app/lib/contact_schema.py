"""Contact form schema.

The inbound body stays an untyped value until :func:`validate` has accepted
it; only then is it narrowed into a :class:`ContactSubmission`. Errors are
reported in the jsonschema-like shape the contact form frontend already
understands (``property`` / ``name`` / ``argument`` / ``message``).
"""
from typing import Any, Dict, List, Sequence

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.core.mailer import OutboundMessage

ROOT = "instance"

class ContactSubmission(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    contact_name: str = Field(alias="contactName", min_length=1)
    contact_email: str = Field(alias="contactEmail")
    contact_subject: str = Field(alias="contactSubject", min_length=1)
    contact_message: str = Field(alias="contactMessage", min_length=1)

    @field_validator("contact_email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        # accept or reject only; the submitted text is relayed as typed
        if "<" in value:
            raise ValueError("display names are not allowed")
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return value


# pydantic error type -> (constraint name, argument, message)
_CONSTRAINTS = {
    "missing": ("required", None, "is required"),
    "string_type": ("type", "string", "is not of a type(s) string"),
    "string_too_short": ("minLength", 1, "does not meet minimum length of 1"),
    "value_error": ("format", "email", 'does not conform to the "email" format'),
    "model_type": ("type", "object", "is not of a type(s) object"),
    "model_attributes_type": ("type", "object", "is not of a type(s) object"),
}


def _property_path(loc: Sequence[Any]) -> str:
    return ".".join([ROOT, *(str(part) for part in loc)])


def _to_entry(err: Dict[str, Any]) -> Dict[str, Any]:
    name, argument, message = _CONSTRAINTS.get(err["type"], (err["type"], None, err["msg"]))
    if name == "required":
        argument = str(err["loc"][-1])
    return {
        "property": _property_path(err["loc"]),
        "name": name,
        "argument": argument,
        "message": message,
    }


def validate(payload: Any) -> List[Dict[str, Any]]:
    """Return every constraint the payload violates; an empty list means valid."""
    try:
        ContactSubmission.model_validate(payload)
    except ValidationError as exc:
        return [_to_entry(err) for err in exc.errors(include_url=False)]
    return []


def malformed_body_error(detail: str) -> List[Dict[str, Any]]:
    return [{
        "property": ROOT,
        "name": "json",
        "argument": None,
        "message": f"body is not valid JSON: {detail}",
    }]


def parse_submission(payload: Any) -> ContactSubmission:
    return ContactSubmission.model_validate(payload)


def build_outbound_message(
    submission: ContactSubmission,
    sender_address: str,
    recipients: Sequence[str],
) -> OutboundMessage:
    """Map a valid submission onto the message sent to the site admins.

    The sender address is always the configured one; the submitter's own
    address only travels in the body so replies go through the admin inbox.
    """
    return OutboundMessage(
        sender_name=submission.contact_name,
        sender_address=sender_address,
        recipients=tuple(recipients),
        subject=submission.contact_subject,
        body=f"{submission.contact_message} Email: {submission.contact_email}",
    )

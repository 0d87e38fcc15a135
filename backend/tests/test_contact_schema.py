import pytest

from app.lib.contact_schema import build_outbound_message, parse_submission, validate

VALID = {
    "contactName": "Alice",
    "contactEmail": "alice@example.com",
    "contactSubject": "Hi",
    "contactMessage": "Hello there",
}


def _failed(errors):
    return {(e["property"], e["name"]) for e in errors}


def test_valid_submission_has_no_errors():
    assert validate(VALID) == []


def test_extra_properties_are_ignored():
    assert validate({**VALID, "newsletter": True}) == []


@pytest.mark.parametrize("field", ["contactName", "contactSubject", "contactMessage", "contactEmail"])
def test_missing_field_is_required(field):
    payload = {k: v for k, v in VALID.items() if k != field}
    errors = validate(payload)
    assert len(errors) == 1
    assert errors[0]["property"] == f"instance.{field}"
    assert errors[0]["name"] == "required"
    assert errors[0]["argument"] == field


@pytest.mark.parametrize("field", ["contactName", "contactSubject", "contactMessage"])
def test_empty_field_fails_min_length(field):
    errors = validate({**VALID, field: ""})
    assert _failed(errors) == {(f"instance.{field}", "minLength")}


@pytest.mark.parametrize("email", ["x", "alice@", "@example.com", "alice example.com", ""])
def test_bad_email_fails_format(email):
    errors = validate({**VALID, "contactEmail": email})
    assert _failed(errors) == {("instance.contactEmail", "format")}


def test_non_string_field_fails_type():
    errors = validate({**VALID, "contactName": 42})
    assert _failed(errors) == {("instance.contactName", "type")}


def test_all_errors_are_collected():
    errors = validate({"contactName": "", "contactEmail": "x", "contactSubject": "s", "contactMessage": "m"})
    assert _failed(errors) == {
        ("instance.contactName", "minLength"),
        ("instance.contactEmail", "format"),
    }
    assert len(validate({})) == 4


@pytest.mark.parametrize("payload", [None, [], "hello", 3])
def test_non_object_payload_is_rejected(payload):
    errors = validate(payload)
    assert errors == [{
        "property": "instance",
        "name": "type",
        "argument": "object",
        "message": "is not of a type(s) object",
    }]


def test_validate_is_repeatable():
    payload = {"contactName": "", "contactEmail": "nope"}
    assert validate(payload) == validate(payload)
    assert payload == {"contactName": "", "contactEmail": "nope"}


def test_outbound_message_mapping():
    message = build_outbound_message(
        parse_submission(VALID),
        sender_address="relay@example.org",
        recipients=["admin@example.org"],
    )
    assert message.sender_name == "Alice"
    assert message.sender_address == "relay@example.org"
    assert message.recipients == ("admin@example.org",)
    assert message.subject == "Hi"
    assert message.body == "Hello there Email: alice@example.com"


def test_display_name_form_fails_format():
    errors = validate({**VALID, "contactEmail": "Mallory <a@example.com>"})
    assert _failed(errors) == {("instance.contactEmail", "format")}


def test_email_is_kept_verbatim():
    submission = parse_submission({**VALID, "contactEmail": "Alice@EXAMPLE.COM"})
    assert submission.contact_email == "Alice@EXAMPLE.COM"

    message = build_outbound_message(submission, "relay@example.org", ("admin@example.org",))
    assert message.body == "Hello there Email: Alice@EXAMPLE.COM"
    assert message.recipients == ("admin@example.org",)

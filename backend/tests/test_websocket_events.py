import pytest
from pydantic import TypeAdapter, ValidationError

from relay.schemas import (
    Role,
    RegisterEvent,
    SessionEvent,
    PairedEvent,
    ControllerLeftEvent,
    ErrorEvent,
    Notification,
)


def test_register_target():
    event = RegisterEvent.model_validate_json('{"type": "register", "role": "target"}')

    assert event.role is Role.TARGET
    assert event.session_code is None


def test_register_controller_reads_camel_case_code():
    event = RegisterEvent.model_validate_json(
        '{"type": "register", "role": "controller", "sessionCode": "482913"}'
    )

    assert event.role is Role.CONTROLLER
    assert event.session_code == "482913"


@pytest.mark.parametrize("code", ['123456', '"123456"', '""', 'null', '{"x": 1}'])
def test_register_target_ignores_stray_session_code(code):
    event = RegisterEvent.model_validate_json(
        '{"type": "register", "role": "target", "sessionCode": ' + code + '}'
    )

    assert event.role is Role.TARGET
    assert event.session_code is None


def test_register_accepts_bytes_payload():
    event = RegisterEvent.model_validate_json(b'{"type": "register", "role": "target"}')
    assert event.role is Role.TARGET


@pytest.mark.parametrize("payload", [
    "not json at all",
    "[]",
    '{"role": "target"}',
    '{"type": "hello", "role": "target"}',
    '{"type": "register"}',
    '{"type": "register", "role": "spectator"}',
    '{"type": "register", "role": "controller"}',
    '{"type": "register", "role": "controller", "sessionCode": ""}',
    '{"type": "register", "role": "controller", "sessionCode": null}',
    '{"type": "register", "role": "controller", "sessionCode": 482913}',
])
def test_register_rejects_malformed(payload):
    with pytest.raises(ValidationError):
        RegisterEvent.model_validate_json(payload)


def test_notifications_use_wire_field_names():
    assert SessionEvent(session_code="482913").to_wire() == {
        "type": "session",
        "sessionCode": "482913",
    }
    assert PairedEvent().to_wire() == {"type": "paired"}
    assert ErrorEvent(message="Invalid or expired code").to_wire() == {
        "type": "error",
        "message": "Invalid or expired code",
    }


def test_notification_union_dispatches_on_type():
    adapter = TypeAdapter(Notification)

    event = adapter.validate_json('{"type": "session", "sessionCode": "123456"}')
    assert isinstance(event, SessionEvent)
    assert event.session_code == "123456"

    assert isinstance(adapter.validate_json('{"type": "controller_left"}'), ControllerLeftEvent)

    with pytest.raises(ValidationError):
        adapter.validate_json('{"type": "register", "role": "target"}')

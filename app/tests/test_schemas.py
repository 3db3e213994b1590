import datetime
import pytest
from pydantic import ValidationError

from app.schemas.alert import AlertCreate, DecisionCreate, Source

def test_source_optional_fields_default_to_empty():
    source = Source(scope="ip", value="1.2.3.4")
    assert source.ip == ""
    assert source.range == ""
    assert source.as_number == ""
    assert source.as_name == ""
    assert source.country == ""
    assert source.latitude == 0.0
    assert source.longitude == 0.0

def test_source_requires_scope_and_value():
    with pytest.raises(ValidationError) as exc_info:
        Source(scope="", value="")
    assert {error["loc"][0] for error in exc_info.value.errors()} == {"scope", "value"}

def test_decision_range_must_not_be_inverted():
    with pytest.raises(ValidationError):
        DecisionCreate(
            until="2024-05-01T14:05:00Z",
            scenario="crowdsecurity/ssh-bf",
            decisionType="ban",
            sourceIpStart=20,
            sourceIpEnd=10,
            sourceValue="1.2.3.4",
            sourceScope="ip"
        )

def test_decision_range_fits_storage():
    with pytest.raises(ValidationError):
        DecisionCreate(
            until="2024-05-01T14:05:00Z",
            scenario="crowdsecurity/ssh-bf",
            decisionType="ban",
            sourceIpStart=0,
            sourceIpEnd=2**64,
            sourceValue="::/0",
            sourceScope="range"
        )

def test_alert_timestamps_normalized_to_utc(make_alert_payload):
    alert = AlertCreate.model_validate(make_alert_payload(1, startedAt="2024-05-01T12:00:00+02:00"))
    assert alert.started_at == datetime.datetime(2024, 5, 1, 10, 0, 0)
    assert alert.started_at.tzinfo is None

def test_alert_accepts_snake_case_names():
    alert = AlertCreate(
        machine_id=1,
        scenario="crowdsecurity/ssh-bf",
        bucket_id="b",
        message="m",
        events_count=1,
        started_at=datetime.datetime(2024, 5, 1, 10, 0, 0),
        stopped_at=datetime.datetime(2024, 5, 1, 10, 1, 0),
        capacity=-1,
        leak_speed=1,
        source=Source(scope="ip", value="1.2.3.4"),
        events=[]
    )
    assert alert.metas == []
    assert alert.decisions == []
    assert alert.capacity == -1

@pytest.mark.parametrize("field", ["machineId", "eventCount", "capacity", "leakSpeed"])
def test_required_integers_must_fit_storage(make_alert_payload, field):
    payload = make_alert_payload(1)
    payload[field] = 2**70

    with pytest.raises(ValidationError) as exc_info:
        AlertCreate.model_validate(payload)
    assert [error["loc"] for error in exc_info.value.errors()] == [(field,)]

@pytest.mark.parametrize("field", ["machineId", "eventCount", "capacity", "leakSpeed"])
def test_required_integers_only_reject_zero(make_alert_payload, field):
    payload = make_alert_payload(1)
    payload[field] = 0
    with pytest.raises(ValidationError):
        AlertCreate.model_validate(payload)

    payload[field] = -3
    alert = AlertCreate.model_validate(payload)
    assert alert.model_dump(by_alias=True)[field] == -3

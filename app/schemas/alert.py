"""
Alert schemas for the Alert Ledger server.

This module defines the Pydantic schemas for alert submissions and the
alert views returned by the API. JSON field names follow the wire format
used by the detection pipeline (``bucketId``, ``startedAt``, ...), while
attributes keep their snake_case names so the same schemas can be built
straight from ORM rows.
"""

from typing import Optional, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator, model_validator

# Integer columns are signed 64-bit
MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)
MAX_IP_INT = MAX_INT64


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware timestamp to naive UTC, the form stored in the database."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class Source(BaseModel):
    """Attribution of an alert: who or what triggered the scenario."""

    scope: str = Field(..., min_length=1, description="Scope of the source, e.g. 'ip' or 'range'")
    value: str = Field(..., min_length=1, description="Value of the source within its scope")
    ip: str = Field("", description="Source IP address")
    range: str = Field("", description="Source CIDR range")
    as_number: str = Field("", description="Autonomous system number")
    as_name: str = Field("", description="Autonomous system name")
    country: str = Field("", description="Country code")
    latitude: float = Field(0.0, description="Latitude of the source")
    longitude: float = Field(0.0, description="Longitude of the source")

    class Config:
        from_attributes = True


class EventCreate(BaseModel):
    """Schema for a raw event attached to an alert submission."""

    time: datetime = Field(..., description="When the event occurred")
    serialized: str = Field(..., description="Opaque serialized payload of the event")

    @field_validator("time")
    @classmethod
    def normalize_time(cls, v):
        return to_naive_utc(v)

    class Config:
        from_attributes = True


class EventRead(EventCreate):
    """Schema for reading an Event."""

    id: int = Field(..., description="The unique ID of the event")


class MetaCreate(BaseModel):
    """Schema for a key/value annotation attached to an alert submission."""

    key: str = Field(..., min_length=1, description="Annotation key")
    value: str = Field("", description="Annotation value")

    class Config:
        from_attributes = True


class MetaRead(MetaCreate):
    """Schema for reading a Meta."""

    id: int = Field(..., description="The unique ID of the meta")


class DecisionCreate(BaseModel):
    """Schema for an enforcement decision attached to an alert submission."""

    until: datetime = Field(..., description="When the decision expires")
    scenario: str = Field(..., description="Scenario that produced the decision")
    decision_type: str = Field(..., alias="decisionType", description="Kind of decision, e.g. 'ban' or 'captcha'")
    source_ip_start: int = Field(..., alias="sourceIpStart", ge=0, le=MAX_IP_INT, description="First address of the targeted range")
    source_ip_end: int = Field(..., alias="sourceIpEnd", ge=0, le=MAX_IP_INT, description="Last address of the targeted range, inclusive")
    source_value: str = Field(..., alias="sourceValue", description="Targeted source value")
    source_scope: str = Field(..., alias="sourceScope", description="Targeted source scope")

    @field_validator("until")
    @classmethod
    def normalize_until(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_ip_range(self):
        """The targeted range must not be inverted."""
        if self.source_ip_start > self.source_ip_end:
            raise ValueError("sourceIpStart must be lower than or equal to sourceIpEnd")
        return self

    class Config:
        from_attributes = True
        populate_by_name = True


class DecisionRead(DecisionCreate):
    """Schema for reading a Decision."""

    id: int = Field(..., description="The unique ID of the decision")


class AlertCreate(BaseModel):
    """Schema for an alert submission."""

    machine_id: int = Field(..., alias="machineId", ge=MIN_INT64, le=MAX_INT64, description="ID of the submitting machine")
    scenario: str = Field(..., min_length=1, description="Scenario that triggered the alert")
    bucket_id: str = Field(..., alias="bucketId", min_length=1, description="ID of the overflowing bucket")
    message: str = Field(..., min_length=1, description="Human readable description of the alert")
    events_count: int = Field(..., alias="eventCount", ge=MIN_INT64, le=MAX_INT64, description="Number of events in the bucket")
    started_at: datetime = Field(..., alias="startedAt", description="Start of the time window")
    stopped_at: datetime = Field(..., alias="stoppedAt", description="End of the time window")
    capacity: int = Field(..., ge=MIN_INT64, le=MAX_INT64, description="Capacity of the originating bucket")
    leak_speed: int = Field(..., alias="leakSpeed", ge=MIN_INT64, le=MAX_INT64, description="Leak speed of the originating bucket")
    reprocess: bool = Field(False, description="Whether the events should be reprocessed")
    source: Source = Field(..., description="Attribution of the alert")
    events: List[EventCreate] = Field(..., description="Raw events behind the alert")
    metas: List[MetaCreate] = Field(default_factory=list, description="Optional annotations")
    decisions: List[DecisionCreate] = Field(default_factory=list, description="Decisions taken for this alert")

    @field_validator("started_at", "stopped_at")
    @classmethod
    def normalize_window(cls, v):
        return to_naive_utc(v)

    @field_validator("machine_id", "events_count", "capacity", "leak_speed")
    @classmethod
    def check_non_zero(cls, v):
        """Required integers are mandatory, zero means the field was left unset."""
        if v == 0:
            raise ValueError("must be non-zero")
        return v

    @field_validator("metas", "decisions", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """Treat an explicit null like an absent collection."""
        return [] if v is None else v

    class Config:
        from_attributes = True
        populate_by_name = True


class AlertRead(BaseModel):
    """Schema for reading an Alert without its child collections."""

    id: int = Field(..., description="The unique ID of the alert")
    machine_id: int = Field(..., alias="machineId", description="ID of the owning machine")
    scenario: str
    bucket_id: str = Field(..., alias="bucketId")
    message: str
    events_count: int = Field(..., alias="eventCount")
    started_at: datetime = Field(..., alias="startedAt")
    stopped_at: datetime = Field(..., alias="stoppedAt")
    capacity: int
    leak_speed: int = Field(..., alias="leakSpeed")
    reprocess: bool
    source: Source
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="When the alert was stored")

    class Config:
        from_attributes = True
        populate_by_name = True


class AlertDetail(AlertRead):
    """Schema for reading an Alert hydrated with its events, metas and decisions."""

    events: List[EventRead] = Field(default_factory=list)
    metas: List[MetaRead] = Field(default_factory=list)
    decisions: List[DecisionRead] = Field(default_factory=list)


class AlertResponse(BaseModel):
    """Envelope for a single alert."""

    data: AlertRead


class AlertDetailResponse(BaseModel):
    """Envelope for a single hydrated alert."""

    data: AlertDetail


class AlertListResponse(BaseModel):
    """Envelope for a list of hydrated alerts."""

    data: List[AlertDetail]

"""
Boundary schemas for MoodTrackr.

Request payloads are validated here before they reach the ORM, and every
realtime message is one of three event models discriminated on ``kind``.
Wire names are camelCase; Python attributes are snake_case.
"""
import datetime as dt
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from utils.helpers import join_list, parse_date, to_flag

SleepQuality = Literal['poor', 'fair', 'good', 'excellent']
SocialInteractions = Literal['none', 'minimal', 'moderate', 'high']

WINDOWS = ('weekly', 'monthly')
NONE_SENTINEL = 'none'

# Projection keys that may be requested as summary metrics
METRIC_FIELDS = [
    'mood', 'anxiety', 'stressLevel', 'sleepHours', 'sleepQuality',
    'sleepDisturbances', 'physicalActivity', 'activityDuration',
    'socialInteractions', 'depressionSymptoms', 'anxietySymptoms', 'notes',
]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Requests ----------

class LogFields(CamelModel):
    """Fields shared by create and update; everything optional here."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    date: Optional[dt.date] = None
    mood: Optional[int] = Field(None, ge=1, le=5)
    anxiety: Optional[int] = Field(None, ge=1, le=5)
    stress_level: Optional[int] = Field(None, ge=1, le=5)
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    sleep_quality: Optional[SleepQuality] = None
    sleep_disturbances: Optional[Union[bool, List[str]]] = None
    physical_activity: Optional[Union[List[str], str]] = None
    activity_duration: Optional[int] = Field(None, ge=0)
    social_interactions: Optional[SocialInteractions] = None
    depression_symptoms: Optional[Union[List[str], str]] = None
    anxiety_symptoms: Optional[Union[List[str], str]] = None
    notes: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def _coerce_date(cls, value):
        return parse_date(value)

    def to_columns(self):
        """Map the fields the caller actually sent onto Log column values."""
        data = self.model_dump(exclude_unset=True)
        for field in ('physical_activity', 'depression_symptoms', 'anxiety_symptoms'):
            if field in data:
                data[field] = join_list(data[field])
        if 'sleep_disturbances' in data:
            data['sleep_disturbances'] = to_flag(data['sleep_disturbances'])
        if 'notes' in data and data['notes'] is not None:
            data['notes'] = data['notes'].strip() or None
        return data


class GoogleLogin(BaseModel):
    token: str = Field(..., min_length=1)


# ---------- Records and projections ----------

class LogRecord(CamelModel):
    id: str
    user_id: str
    date: str
    mood: int
    anxiety: int
    stress_level: Optional[int] = None
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[SleepQuality] = None
    sleep_disturbances: Optional[bool] = None
    physical_activity: Optional[str] = None
    activity_duration: Optional[int] = None
    social_interactions: Optional[SocialInteractions] = None
    depression_symptoms: Optional[str] = None
    anxiety_symptoms: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Projection(CamelModel):
    """One chart point of an aggregate view."""

    id: str
    date: str
    formatted_date: str
    mood: int = 0
    anxiety: int = 0
    stress_level: int = 0
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[SleepQuality] = None
    sleep_disturbances: Optional[bool] = None
    physical_activity: str = NONE_SENTINEL
    activity_duration: Optional[int] = None
    social_interactions: Optional[SocialInteractions] = None
    depression_symptoms: str = NONE_SENTINEL
    anxiety_symptoms: str = NONE_SENTINEL
    notes: Optional[str] = None


class SummaryData(CamelModel):
    weekly: List[Projection]
    monthly: List[Projection]


# ---------- Realtime events ----------

class LogCreatedEvent(CamelModel):
    kind: Literal['created'] = 'created'
    new_log: LogRecord
    summary_data: Optional[SummaryData] = None


class LogUpdatedEvent(CamelModel):
    kind: Literal['updated'] = 'updated'
    updated_log: LogRecord
    summary_data: Optional[SummaryData] = None


class LogDeletedEvent(CamelModel):
    kind: Literal['deleted'] = 'deleted'
    deleted_log_id: str
    summary_data: Optional[SummaryData] = None


LogEvent = Annotated[
    Union[LogCreatedEvent, LogUpdatedEvent, LogDeletedEvent],
    Field(discriminator='kind'),
]
log_event_adapter = TypeAdapter(LogEvent)

EVENT_NAMES = {
    'created': 'log:created',
    'updated': 'log:updated',
    'deleted': 'log:deleted',
}


def build_event(kind, record, summary=None):
    """Build the typed event for a mutation; ``record`` is a Log dict or, for deletes, an id."""
    summary_data = SummaryData(**summary) if summary is not None else None
    if kind == 'created':
        return LogCreatedEvent(new_log=LogRecord(**record), summary_data=summary_data)
    if kind == 'updated':
        return LogUpdatedEvent(updated_log=LogRecord(**record), summary_data=summary_data)
    if kind == 'deleted':
        return LogDeletedEvent(deleted_log_id=record, summary_data=summary_data)
    raise ValueError(f"Unknown mutation kind {kind!r}")


def parse_event(payload):
    """Validate an incoming event dict into one of the three event models."""
    return log_event_adapter.validate_python(payload)

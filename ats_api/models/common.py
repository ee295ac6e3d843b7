"""Base pydantic schemas for API payloads."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Schema serialized with camelCase keys, readable from ORM objects."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TimestampedModel(ApiModel):
    created_date: datetime
    updated_date: datetime

    @field_serializer("created_date", "updated_date")
    def serialize_datetime(self, dt: datetime, _info) -> str:
        """
        Serialize datetime to ISO8601 with 'Z' timezone indicator.

        Naive values coming back from SQLite are assumed to be UTC.
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        else:
            dt = dt.astimezone(UTC)
        return dt.isoformat().replace("+00:00", "Z")

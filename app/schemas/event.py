import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    club_id: str | None = Field(default=None, alias="clubId")
    date_time: datetime.datetime | None = Field(default=None, alias="dateTime")
    end_date_time: datetime.datetime | None = Field(default=None, alias="endDateTime")
    location: str | None = None
    max_attendees: int | None = Field(default=None, alias="maxAttendees", ge=1)

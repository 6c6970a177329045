from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    content: str | None = None
    club_id: str | None = Field(default=None, alias="clubId")


class ClubAnnouncementCreate(BaseModel):
    title: str | None = None
    content: str | None = None

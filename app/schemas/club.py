from pydantic import BaseModel, ConfigDict, Field


class ClubCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: str | None = None
    category: str | None = None
    contact_email: str | None = Field(default=None, alias="contactEmail")
    logo: str | None = None
    allow_joining: bool = Field(default=True, alias="allowJoining")
    require_approval: bool = Field(default=False, alias="requireApproval")
    max_members: int | None = Field(default=None, alias="maxMembers", ge=1)


class ClubSettingsUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    allow_joining: bool | None = Field(default=None, alias="allowJoining")
    require_approval: bool | None = Field(default=None, alias="requireApproval")
    max_members: int | None = Field(default=None, alias="maxMembers", ge=1)


class JoinRequest(BaseModel):
    message: str | None = None


class RejectRequest(BaseModel):
    reason: str | None = None

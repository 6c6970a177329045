from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


# 관리자 role 변경 요청용 (club_head 지정 시 clubId 선택)
class RoleUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Role | None = None
    club_id: str | None = Field(default=None, alias="clubId")


class PromoteClubHead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    club_id: str | None = Field(default=None, alias="clubId")


class AssignHead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")

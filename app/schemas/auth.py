from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


# 필수 값 검사는 서비스(require_fields)에서 수행 -> 누락 필드 맵을 그대로 응답하기 위해 모두 Optional
class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    password: str | None = None
    role: Role | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None

from pydantic import EmailStr

from app.schemas.base import CamelModel


class UserOut(CamelModel):
    id: str
    email: EmailStr
    full_name: str
    created_at: str


class MeResponse(CamelModel):
    user: UserOut

from pydantic import BaseModel

from app.core.security import AdminIdentity


class LoginRequest(BaseModel):
    # missing fields are treated as a credential mismatch, not a validation error
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    message: str
    token: str
    admin: AdminIdentity

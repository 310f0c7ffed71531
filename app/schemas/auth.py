from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: str | None = None


class TokenPayload(BaseModel):
    sub: str | None = None
    email: str | None = None
    aud: str | None = None


class RefreshRequest(BaseModel):
    refresh_token: str

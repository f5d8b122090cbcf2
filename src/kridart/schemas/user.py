"""Account and authentication schemas."""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Username/password pair submitted to register or log in.

    Both fields are optional at the schema level so that missing values are
    reported as a 400 by the route rather than a framework 422.
    """

    username: str | None = Field(None, description="Unique account name")
    password: str | None = Field(None, description="Plain text password")


class MessageResponse(BaseModel):
    """Generic acknowledgement body."""

    message: str


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    token: str = Field(..., description="Signed bearer token")

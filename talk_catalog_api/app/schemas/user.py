"""
Pydantic models for account data.

``Credentials`` is the request body of both ``/register`` and
``/login``.  ``AccountRead`` is what the API returns about an account;
the password hash never leaves the service layer.
"""

from pydantic import BaseModel, Field, field_validator


class Credentials(BaseModel):
    """Username and plain text password submitted by a client.

    Both values end up UTF-8 encoded (in the store and in the password
    hash), so strings that cannot be encoded, such as JSON escapes of
    lone surrogates, are rejected here.
    """

    username: str = Field(..., min_length=1, examples=["ada"])
    password: str = Field(..., examples=["correct horse battery"])

    @field_validator("username", "password")
    @classmethod
    def validate_encodable(cls, v: str) -> str:
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid UTF-8 text")
        return v


class AccountRead(BaseModel):
    """Schema for reading an account from the API."""

    id: int
    username: str
    access_token: str = Field(..., alias="accessToken")

    model_config = {
        "populate_by_name": True,
    }


class AccountResponse(BaseModel):
    success: bool = True
    response: AccountRead


class ErrorResponse(BaseModel):
    """Envelope returned for every rejected request."""

    success: bool = False
    response: str

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# --- User ---

class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=255)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("email")
    @classmethod
    def email_well_formed(cls, value: str) -> str:
        # Syntax check only; the address is stored exactly as submitted.
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return value


class UserCreate(UserBase):
    # Write-only; never echoed back in any response model.
    password: str = Field(min_length=6, max_length=128)

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class UserUpdate(UserBase):
    pass


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    model_config = ConfigDict(from_attributes=True)


# --- Post ---

class PostBase(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class PostCreate(PostBase):
    author_id: int


class PostUpdate(PostBase):
    pass


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime
    author_id: int
    author_username: str


# --- Comment ---

class CommentBase(BaseModel):
    content: str = Field(min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class CommentCreate(CommentBase):
    author_id: int
    post_id: int


class CommentUpdate(CommentBase):
    pass


class CommentResponse(BaseModel):
    id: int
    content: str
    created_at: datetime
    author_id: int
    author_username: str
    post_id: int

"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .base import StoredRecord


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(v: str) -> str:
	if not EMAIL_PATTERN.match(v):
		raise ValueError("Please enter a valid email address")
	return v


class PublicUser(StoredRecord):
	"""User record without the password, safe to keep in the session slot."""
	id: str
	username: str
	email: str
	bio: Optional[str] = None
	avatar: Optional[str] = None
	location: Optional[str] = None
	website: Optional[str] = None
	created_at: datetime


class User(PublicUser):
	password: str

	def to_public(self) -> PublicUser:
		return PublicUser.model_validate(self.model_dump(exclude={"password"}))


class UserCreate(BaseModel):
	username: str = Field(..., min_length=1)
	email: str
	password: str = Field(..., min_length=6)
	bio: Optional[str] = None
	avatar: Optional[str] = None
	location: Optional[str] = None
	website: Optional[str] = None

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _check_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"username": "sarah_dev",
			"email": "sarah@example.com",
			"password": "StrongPass!234",
			"bio": "Full-stack developer passionate about React and Node.js",
			"location": "San Francisco, CA",
		}
	})


class UserUpdate(BaseModel):
	username: Optional[str] = Field(None, min_length=1)
	email: Optional[str] = None
	password: Optional[str] = Field(None, min_length=6)
	bio: Optional[str] = None
	avatar: Optional[str] = None
	location: Optional[str] = None
	website: Optional[str] = None

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		return _check_email(v)


class LoginRequest(BaseModel):
	email: str
	password: str = Field(..., min_length=6)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _check_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "sarah@example.com",
			"password": "password",
		}
	})


class RegisterForm(BaseModel):
	"""Fields submitted on the registration page."""
	username: str
	email: str
	password: str
	confirm_password: str

	@field_validator("username")
	@classmethod
	def validate_username(cls, v: str) -> str:
		if len(v) < 3:
			raise ValueError("Username must be at least 3 characters")
		return v

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _check_email(v)

	@field_validator("password")
	@classmethod
	def validate_password(cls, v: str) -> str:
		if len(v) < 6:
			raise ValueError("Password must be at least 6 characters")
		return v

	@field_validator("confirm_password")
	@classmethod
	def validate_confirm_password(cls, v: str, info: ValidationInfo) -> str:
		password = info.data.get("password")
		if password is not None and v != password:
			raise ValueError("Passwords do not match")
		return v

	def to_user_create(self) -> UserCreate:
		return UserCreate(username=self.username, email=self.email, password=self.password)

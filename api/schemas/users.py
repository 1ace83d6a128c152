"""User and authentication API schemas."""

from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator

from api.schemas.common import TimestampMixin, check_length, strip_if_str
from core.utils.validators import (
    normalize_email,
    normalize_skills,
    split_skills,
    validate_aadhaar,
    validate_email,
    validate_gst,
    validate_password_strength,
    validate_phone,
)
from database.models.users import UserRole

PHONE_MESSAGE = "Invalid phone number format. Use +[country code][number] or local format."
AADHAAR_MESSAGE = "Invalid Aadhaar number. Must be 12 digits and not start with 0 or 1."
GST_MESSAGE = "Invalid GST number format. Example: 22AAAAA0000A1Z5"


class UserProfileFields(BaseModel):
    """Optional profile fields shared by registration and profile updates."""

    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    pincode: Optional[str] = Field(None, max_length=10)
    profile_photo: Optional[str] = Field(None, max_length=2048, description="Photo URL")
    aadhaar_number: Optional[str] = Field(None, description="12-digit Aadhaar number")
    gst_number: Optional[str] = Field(None, description="15-character GSTIN")

    # Talent profile
    skills: Optional[Union[list[str], str]] = Field(
        None, description="Skills as a list or a comma-separated string"
    )
    bio: Optional[str] = Field(None, max_length=2000)
    experience_years: Optional[int] = Field(None, ge=0, le=80)
    hourly_rate: Optional[int] = Field(None, ge=0, le=1_000_000)

    @field_validator(
        "phone", "address", "city", "state", "pincode", "aadhaar_number", "gst_number", "bio",
        mode="before",
    )
    @classmethod
    def strip_whitespace(cls, v):
        return strip_if_str(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if not validate_phone(v):
            raise ValueError(PHONE_MESSAGE)
        return v

    @field_validator("aadhaar_number")
    @classmethod
    def validate_aadhaar_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if not validate_aadhaar(v):
            raise ValueError(AADHAAR_MESSAGE)
        return v

    @field_validator("gst_number")
    @classmethod
    def validate_gst_format(cls, v: Optional[str]) -> Optional[str]:
        """GST numbers are accepted in any case and stored upper-cased."""
        if v is None:
            return None
        if not validate_gst(v):
            raise ValueError(GST_MESSAGE)
        return v.upper()

    @field_validator("skills")
    @classmethod
    def normalize_skill_list(cls, v) -> Optional[str]:
        return normalize_skills(v)


class UserCreate(UserProfileFields):
    """Schema for registering a user."""

    email: str = Field(..., description="Login email, stored lower-cased")
    password: str = Field(..., description="Plain-text password, hashed before storage")
    name: str = Field(..., description="Display name")
    role: UserRole = Field(default=UserRole.TALENT, description="Account role")

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        if not v:
            raise ValueError("Email is required")
        email = normalize_email(v)
        is_valid, _ = validate_email(email)
        if not is_valid:
            raise ValueError("Invalid email format")
        return email

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        is_valid, errors = validate_password_strength(v)
        if not is_valid:
            raise ValueError(errors[0])
        return v

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return strip_if_str(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_length(v, "Name", 2, 100)


class UserUpdate(UserProfileFields):
    """Partial profile update. Email, role and password are not editable here."""

    name: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return strip_if_str(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return check_length(v, "Name", 2, 100)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        if not v:
            raise ValueError("Email is required")
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def require_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserResponse(TimestampMixin):
    """Public view of a user. Never carries the password hash or Aadhaar number."""

    id: int
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    profile_photo: Optional[str] = None
    aadhaar_verified: bool = False
    gst_number: Optional[str] = None
    gst_verified: bool = False
    is_banned: bool = False
    skills: list[str] = Field(default_factory=list)
    bio: Optional[str] = None
    experience_years: Optional[int] = None
    hourly_rate: Optional[int] = None
    rating: Optional[float] = None
    jobs_completed: int = 0

    @field_validator("skills", mode="before")
    @classmethod
    def split_stored_skills(cls, v):
        if v is None or isinstance(v, str):
            return split_skills(v)
        return v

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Compact user reference embedded in other resources."""

    id: int
    name: str
    profile_photo: Optional[str] = None

    class Config:
        from_attributes = True


class TalentSearchResult(BaseModel):
    """Talent row from the talent search with computed reputation fields."""

    id: int
    name: str
    city: Optional[str] = None
    state: Optional[str] = None
    profile_photo: Optional[str] = None
    aadhaar_verified: bool = False
    skills: list[str] = Field(default_factory=list)
    bio: Optional[str] = None
    experience_years: Optional[int] = None
    hourly_rate: Optional[int] = None
    rating: float = 0.0
    jobs_completed: int = 0

    @field_validator("skills", mode="before")
    @classmethod
    def split_stored_skills(cls, v):
        if v is None or isinstance(v, str):
            return split_skills(v)
        return v


class AuthResponse(BaseModel):
    """Token issued on register and login."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserResponse

"""
Pydantic schemas for request validation and response serialization.

Request schemas run the named field sanitizers from ``utils.sanitizer`` so
that handlers only ever see cleaned values.
"""
from pydantic import BaseModel, Field, PositiveInt, ValidationInfo, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from .utils.sanitizer import sanitize_email, sanitize_phone, sanitize_string, sanitize_text

NAME_MAX_LENGTH = 255


def _clean_name(value: Optional[str], field: str, required: bool) -> Optional[str]:
    if value is None:
        if required:
            raise ValueError(f"{field} is required")
        return None
    cleaned = sanitize_string(value)
    if required and not cleaned:
        raise ValueError(f"{field} is required")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValueError(f"{field} must be between 1 and {NAME_MAX_LENGTH} characters")
    return cleaned


def _clean_tag_names(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    cleaned = []
    for value in values:
        name = sanitize_string(value)
        if not name:
            continue
        if len(name) > NAME_MAX_LENGTH:
            raise ValueError(f"Tag names must be at most {NAME_MAX_LENGTH} characters")
        cleaned.append(name)
    return cleaned


# Auth
class LoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


# Shared
class Pagination(BaseModel):
    total_items: int
    current_page: int
    per_page: int
    total_pages: int
    offset: int


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    error_type: Optional[str] = None
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None


# Locations
# Column sizes of the locations table; checked on the sanitized (encoded) value
LOCATION_MAX_LENGTHS = {"city": 255, "zip_code": 20, "country_code": 10, "phone_number": 20}


class LocationFields(BaseModel):
    city: Optional[str] = None
    address: Optional[str] = None
    zip_code: Optional[str] = None
    country_code: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("city", "zip_code", "country_code", "phone_number")
    @classmethod
    def clean_strings(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None:
            return None
        cleaned = sanitize_string(v)
        limit = LOCATION_MAX_LENGTHS[info.field_name]
        if len(cleaned) > limit:
            raise ValueError(f"{info.field_name} must be at most {limit} characters")
        return cleaned

    @field_validator("address")
    @classmethod
    def clean_address(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_text(v) if v is not None else None


class LocationCreate(LocationFields):
    pass


class LocationUpdate(LocationFields):
    pass


class LocationOut(BaseModel):
    id: int
    city: Optional[str] = None
    address: Optional[str] = None
    zip_code: Optional[str] = None
    country_code: Optional[str] = None
    phone_number: Optional[str] = None

    model_config = {"from_attributes": True}


class LocationListResponse(BaseModel):
    locations: List[LocationOut]
    pagination: Pagination


# Tags
class TagCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _clean_name(v, "Name", required=True)


class TagUpdate(TagCreate):
    pass


class TagOut(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class TagListResponse(BaseModel):
    tags: List[TagOut]
    pagination: Pagination


# Facilities
class FacilityCreate(BaseModel):
    name: str
    location_id: PositiveInt
    tag_ids: List[PositiveInt] = Field(default_factory=list, alias="tagIds")
    tag_names: List[str] = Field(default_factory=list, alias="tagNames")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _clean_name(v, "Name", required=True)

    @field_validator("tag_names")
    @classmethod
    def clean_tag_names(cls, v: List[str]) -> List[str]:
        return _clean_tag_names(v)


class FacilityUpdate(BaseModel):
    name: Optional[str] = None
    location_id: Optional[PositiveInt] = None
    tag_ids: Optional[List[PositiveInt]] = Field(None, alias="tagIds")
    tag_names: Optional[List[str]] = Field(None, alias="tagNames")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_name(v, "Name", required=False)

    @field_validator("tag_names")
    @classmethod
    def clean_tag_names(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tag_names(v)


class FacilityOut(BaseModel):
    id: int
    name: str
    creation_date: datetime
    location: LocationOut
    tags: List[TagOut] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "name": "Hall",
                    "creation_date": "2024-01-15T10:30:00",
                    "location": {"id": 1, "city": "Rotterdam", "address": None, "zip_code": None,
                                 "country_code": None, "phone_number": None},
                    "tags": [{"id": 1, "name": "Wedding"}]
                }
            ]
        }
    }


class FacilityListResponse(BaseModel):
    facilities: List[FacilityOut]
    pagination: Pagination


class FacilitySummary(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


# Employees
class EmployeeFields(BaseModel):
    address: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("address")
    @classmethod
    def clean_address(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_text(v) if v is not None else None

    @field_validator("phone")
    @classmethod
    def clean_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        phone = sanitize_phone(v)
        if phone is None:
            raise ValueError("Invalid phone number")
        return phone


class EmployeeCreate(EmployeeFields):
    name: str
    email: str
    facility_ids: List[PositiveInt] = Field(default_factory=list, alias="facilityIds")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _clean_name(v, "Name", required=True)

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: str) -> str:
        email = sanitize_email(v)
        if email is None:
            raise ValueError("Invalid email format")
        return email


class EmployeeUpdate(EmployeeFields):
    name: Optional[str] = None
    email: Optional[str] = None
    facility_ids: Optional[List[PositiveInt]] = Field(None, alias="facilityIds")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_name(v, "Name", required=False)

    @field_validator("email")
    @classmethod
    def clean_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        email = sanitize_email(v)
        if email is None:
            raise ValueError("Invalid email format")
        return email


class EmployeeOut(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: str
    created_at: datetime
    facilities: List[FacilitySummary] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class EmployeeListResponse(BaseModel):
    employees: List[EmployeeOut]
    pagination: Pagination

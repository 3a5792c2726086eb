from typing import Annotated, Literal, Optional

from pydantic import EmailStr, StringConstraints

from .base import CamelModel

Role = Literal["requester", "provider"]
UserType = Literal["individual", "company"]

# passwords are hashed exactly as sent
Password = Annotated[str, StringConstraints(strip_whitespace=False, min_length=1)]


class Address(CamelModel):
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    city_suburb: Optional[str] = None
    state: Optional[str] = None
    post_code: Optional[str] = None


class SignUpRequest(CamelModel):
    role: Role
    user_type: UserType
    email: EmailStr
    password: Password
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    phone_number: Optional[str] = None
    business_tax_number: Optional[str] = None
    address: Optional[Address] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: Password

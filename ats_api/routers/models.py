"""Pydantic request/response models for API endpoints."""

from datetime import date

from pydantic import EmailStr, Field, field_validator

from ats_api.models.common import ApiModel, TimestampedModel
from ats_api.models.enums import Contract, ProcessStatus
from ats_api.models.pagination import PaginationMetadata


# Users


class UserResponse(TimestampedModel):
    """Public representation of a user; the password hash is never part of it."""

    id: int
    first_name: str
    last_name: str
    email: str
    slug: str


class CreateUserRequest(ApiModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v):
        # bcrypt rejects passwords longer than 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError("password must not be longer than 72 bytes")
        return v


class LoginRequest(ApiModel):
    email: str
    password: str


class TokenResponse(ApiModel):
    """XSRF token to send back in the ``x-xsrf-token`` header."""

    token: str
    expires_in: int


class AuthResponse(ApiModel):
    user: UserResponse
    xsrf_token: TokenResponse


class RefreshResponse(ApiModel):
    xsrf_token: TokenResponse


# Clients and offers


class ClientSummary(TimestampedModel):
    id: int
    name: str
    phone: str
    slug: str


class OfferSummary(TimestampedModel):
    id: int
    job: str
    slug: str
    annual_salary: int
    contract_type: Contract


class ClientResponse(ClientSummary):
    account_manager: UserResponse | None = None
    offers: list[OfferSummary] = []


class CreateClientRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., pattern=r"^\+?[0-9 .()-]{6,20}$")
    account_manager: str | None = Field(None, description="Slug of the account manager")


class OfferResponse(OfferSummary):
    owner: ClientSummary | None = None
    referrer: UserResponse | None = None


class UserDetailResponse(UserResponse):
    offers: list[OfferSummary] = []
    clients: list[ClientSummary] = []


# Candidates and hiring processes


class CandidateSummary(TimestampedModel):
    id: int
    name: str
    slug: str
    email: str


class QualificationResponse(ApiModel):
    id: int
    rank: int


class InterviewResponse(TimestampedModel):
    id: int
    comments: str
    recruiter_id: int | None = None


class OfferProcessResponse(TimestampedModel):
    """A hiring process seen from its offer."""

    id: int
    status: ProcessStatus
    candidate: CandidateSummary


class CandidateProcessResponse(TimestampedModel):
    """A hiring process seen from its candidate."""

    id: int
    status: ProcessStatus
    offer: OfferSummary


class OfferDetailResponse(OfferResponse):
    processes: list[OfferProcessResponse] = []


class CandidateResponse(CandidateSummary):
    resume: str
    referrer: UserResponse | None = None


class CandidateDetailResponse(CandidateResponse):
    qualification: QualificationResponse | None = None
    processes: list[CandidateProcessResponse] = []
    interviews: list[InterviewResponse] = []


# Analytics


class AcquisitionPoint(ApiModel):
    """Number of entities created on a given day."""

    day: date
    count: int


# List envelopes


class UserListResponse(ApiModel):
    users: list[UserResponse]
    metadata: PaginationMetadata


class ClientListResponse(ApiModel):
    clients: list[ClientResponse]
    metadata: PaginationMetadata


class OfferListResponse(ApiModel):
    offers: list[OfferResponse]
    metadata: PaginationMetadata


class CandidateListResponse(ApiModel):
    candidates: list[CandidateResponse]
    metadata: PaginationMetadata


class ErrorResponse(ApiModel):
    status: int
    message: str
    hint: object = None

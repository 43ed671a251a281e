"""Contribution policy records and the pure merge used on every upsert.

A policy is a user's chosen 401(k) savings rate and its basis (percentage of
salary or fixed amount per paycheck) together with the demographic inputs the
projection needs. Field names are snake_case in Python and camelCase in JSON.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field, ValidationError, ValidationInfo, field_validator

from nestegg.core.exceptions import InvalidInputError
from nestegg.models.base import CamelModel


class ContributionType(str, Enum):
    """Basis of the contribution value."""

    PERCENTAGE = "percentage"  # percent of annual salary
    FIXED = "fixed"  # currency amount per paycheck


class PaycheckFrequency(str, Enum):
    BIWEEKLY = "biweekly"

    @property
    def periods_per_year(self) -> int:
        return PAY_PERIODS_PER_YEAR[self]


PAY_PERIODS_PER_YEAR = {PaycheckFrequency.BIWEEKLY: 26}

MAX_PERCENTAGE = 100.0


def check_contribution_value(value: float, info: ValidationInfo) -> float:
    """Reject percentages above 100; runs after the field's own ge=0 bound."""
    if info.data.get("contribution_type") == ContributionType.PERCENTAGE and value > MAX_PERCENTAGE:
        raise ValueError("Percentage must be between 0 and 100")
    return value


def check_retirement_age(value: Optional[int], info: ValidationInfo) -> Optional[int]:
    current_age = info.data.get("current_age")
    if value is not None and current_age is not None and value <= current_age:
        raise ValueError("retirementAge must be greater than currentAge")
    return value


class PolicyDefaults(CamelModel, frozen=True):
    """Demographic values back-filled for a user's first upsert."""

    annual_salary: float = 75000.0
    current_age: int = 30
    retirement_age: int = 65
    employer_match_percent: float = 3.0
    paycheck_frequency: PaycheckFrequency = PaycheckFrequency.BIWEEKLY
    year_to_date_contributions: float = 0.0


DEFAULT_POLICY = PolicyDefaults()


class ContributionPolicy(CamelModel):
    """Stored contribution policy for a single user."""

    user_id: str = Field(min_length=1)
    contribution_type: ContributionType
    contribution_value: float = Field(ge=0)
    annual_salary: float = Field(gt=0)
    current_age: int = Field(gt=0)
    retirement_age: int = Field(gt=0)
    employer_match_percent: float = Field(default=0.0, ge=0)
    paycheck_frequency: PaycheckFrequency = PaycheckFrequency.BIWEEKLY
    year_to_date_contributions: float = Field(default=0.0, ge=0)
    last_updated: Optional[datetime] = None

    @field_validator("contribution_value")
    @classmethod
    def percentage_in_range(cls, value: float, info: ValidationInfo) -> float:
        return check_contribution_value(value, info)

    @field_validator("retirement_age")
    @classmethod
    def retires_after_current_age(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        return check_retirement_age(value, info)

    def same_settings(self, other: "ContributionPolicy") -> bool:
        """True when both records match in every field except lastUpdated."""
        return self.model_dump(exclude={"last_updated"}) == other.model_dump(exclude={"last_updated"})


class PolicyUpdate(CamelModel):
    """Upsert input: the contribution choice plus optional demographic overrides."""

    contribution_type: ContributionType
    contribution_value: float = Field(ge=0)
    annual_salary: Optional[float] = Field(default=None, gt=0)
    current_age: Optional[int] = Field(default=None, gt=0)
    retirement_age: Optional[int] = Field(default=None, gt=0)
    employer_match_percent: Optional[float] = Field(default=None, ge=0)

    @field_validator("contribution_value")
    @classmethod
    def percentage_in_range(cls, value: float, info: ValidationInfo) -> float:
        return check_contribution_value(value, info)

    @field_validator("retirement_age")
    @classmethod
    def retires_after_current_age(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        return check_retirement_age(value, info)


class ContributionRequest(PolicyUpdate):
    """Body of ``POST /api/contribution``."""

    user_id: Optional[str] = Field(default=None, min_length=1)

    def to_update(self) -> PolicyUpdate:
        return PolicyUpdate.model_validate(self.model_dump(exclude={"user_id"}))


class DemographicSummary(CamelModel):
    """Read-only view of the demographic part of a policy."""

    user_id: str
    annual_salary: float
    current_age: int
    retirement_age: int
    employer_match_percent: float
    paycheck_frequency: PaycheckFrequency

    @classmethod
    def from_policy(cls, policy: ContributionPolicy) -> "DemographicSummary":
        return cls.model_validate(policy.model_dump(include=set(cls.model_fields)))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def apply_update(
    existing: Optional[ContributionPolicy],
    user_id: str,
    update: PolicyUpdate,
    now: datetime,
) -> ContributionPolicy:
    """Merge ``update`` over ``existing`` (or DEFAULT_POLICY) and stamp ``now``.

    Overrides left as None keep the base value. The merged record is validated
    as a whole, so an override that breaks an invariant (e.g. a retirement age
    below the stored current age) raises InvalidInputError.
    """
    if existing is not None:
        base = existing.model_dump(by_alias=True)
    else:
        base = DEFAULT_POLICY.model_dump(by_alias=True)
    merged = {
        **base,
        **update.model_dump(by_alias=True, exclude_none=True),
        "userId": user_id,
        "lastUpdated": now,
    }
    try:
        return ContributionPolicy.model_validate(merged)
    except ValidationError as exc:
        raise InvalidInputError.from_validation_error(exc) from exc

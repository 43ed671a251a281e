"""Projection request/response contracts."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, Field, ValidationInfo, field_validator

from nestegg.models.base import CamelModel
from nestegg.models.policy import ContributionType, check_contribution_value, check_retirement_age

SeriesCompounding = Literal["annual", "monthly"]


class ProjectionRequest(CamelModel):
    """Inputs to the projection calculator. The policy need not be saved."""

    current_age: int = Field(gt=0)
    retirement_age: int = Field(gt=0)
    annual_salary: float = Field(gt=0)
    contribution_type: ContributionType
    contribution_value: float = Field(ge=0)
    current_balance: float = Field(default=0.0, ge=0)
    annual_return_rate: Optional[float] = Field(
        default=None,
        gt=-1,
        le=1,
        validation_alias=AliasChoices("annualReturnRate", "annualReturn"),
        description="Decimal rate, e.g. 0.07. Falls back to the configured default.",
    )
    include_series: bool = False
    series_compounding: Optional[SeriesCompounding] = None

    @field_validator("contribution_value")
    @classmethod
    def percentage_in_range(cls, value: float, info: ValidationInfo) -> float:
        return check_contribution_value(value, info)

    @field_validator("retirement_age")
    @classmethod
    def retires_after_current_age(cls, value: int, info: ValidationInfo) -> int:
        return check_retirement_age(value, info)


class ProjectionPoint(CamelModel):
    """Balance and contributions at the end of one year."""

    age: int
    cumulative_balance: int
    cumulative_contributions: int


class ProjectionResult(CamelModel):
    total_at_retirement: int
    total_contributions: int
    investment_gains: int
    monthly_contribution: float
    years_to_retirement: int
    assumed_annual_return: float  # percent
    annual_contribution: float
    paycheck_contribution: float
    irs_annual_limit: float
    exceeds_irs_limit: bool
    series: Optional[list[ProjectionPoint]] = None


class ProjectionResponse(CamelModel):
    projection: ProjectionResult

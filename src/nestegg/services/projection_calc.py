"""Retirement projection calculator.

Turns a contribution policy into a projected balance at retirement using the
future value of an ordinary annuity (payments at the end of each month) plus
the compounded value of any existing balance:

    FV = PV * (1 + r)^n + PMT * ((1 + r)^n - 1) / r

The summary totals always use monthly compounding. The optional year-by-year
series has two modes:

* ``annual`` - illustrative trajectory compounded once a year,
  ``balance(y) = balance(y-1) * (1 + R) + annual_contribution``. Its last
  point is close to, but not equal to, ``total_at_retirement``.
* ``monthly`` - the closed form above evaluated at every 12th month, so the
  last point reconciles with ``total_at_retirement``.

Everything here is pure; no I/O and no store access.
"""

from __future__ import annotations

import math
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from nestegg.core.exceptions import InvalidInputError
from nestegg.models.policy import PAY_PERIODS_PER_YEAR, ContributionType, PaycheckFrequency
from nestegg.models.projection import (
    ProjectionPoint,
    ProjectionRequest,
    ProjectionResult,
    SeriesCompounding,
)

MONTHS_PER_YEAR = 12
PAY_PERIODS = PAY_PERIODS_PER_YEAR[PaycheckFrequency.BIWEEKLY]
DEFAULT_ANNUAL_RETURN = 0.07
DEFAULT_IRS_ANNUAL_LIMIT = 23000.0


def round_currency(value: float) -> int:
    """Round to the nearest whole unit, halves up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Contribution amounts
# ---------------------------------------------------------------------------

def annual_contribution(
    contribution_type: ContributionType,
    contribution_value: float,
    annual_salary: float,
) -> float:
    if contribution_type == ContributionType.PERCENTAGE:
        return annual_salary * contribution_value / 100
    return contribution_value * PAY_PERIODS


def monthly_contribution(
    contribution_type: ContributionType,
    contribution_value: float,
    annual_salary: float,
) -> float:
    return annual_contribution(contribution_type, contribution_value, annual_salary) / MONTHS_PER_YEAR


def paycheck_contribution(
    contribution_type: ContributionType,
    contribution_value: float,
    annual_salary: float,
) -> float:
    if contribution_type == ContributionType.PERCENTAGE:
        return annual_salary / PAY_PERIODS * contribution_value / 100
    return contribution_value


def future_value(
    present_value: float,
    payment: float,
    rate: float,
    periods: int,
) -> float:
    """Future value of ``present_value`` plus an ordinary annuity of ``payment``.

    ``rate`` is the per-period rate. A zero rate degenerates to simple
    accumulation.
    """
    growth = (1 + rate) ** periods
    if rate == 0:
        stream = payment * periods
    else:
        stream = payment * (growth - 1) / rate
    return present_value * growth + stream


# ---------------------------------------------------------------------------
# Year-by-year series
# ---------------------------------------------------------------------------

class ProjectionSeries:
    """Finite, lazy, restartable sequence of yearly ProjectionPoints.

    Each call to ``iter()`` starts over from the current age, so the same
    series can feed several consumers.
    """

    def __init__(
        self,
        *,
        current_age: int,
        years: int,
        current_balance: float,
        annual_contribution: float,
        annual_return_rate: float,
        compounding: SeriesCompounding = "annual",
    ) -> None:
        if compounding not in ("annual", "monthly"):
            raise ValueError(f"Unknown compounding mode {compounding!r}")
        self.current_age = current_age
        self.years = years
        self.current_balance = current_balance
        self.annual_contribution = annual_contribution
        self.annual_return_rate = annual_return_rate
        self.compounding = compounding

    def __len__(self) -> int:
        return self.years + 1

    def __iter__(self) -> Iterator[ProjectionPoint]:
        if self.compounding == "monthly":
            return self._monthly()
        return self._annual()

    def _point(self, year: int, balance: float) -> ProjectionPoint:
        return ProjectionPoint(
            age=self.current_age + year,
            cumulative_balance=round_currency(balance),
            cumulative_contributions=round_currency(self.annual_contribution * year),
        )

    def _annual(self) -> Iterator[ProjectionPoint]:
        balance = self.current_balance
        for year in range(self.years + 1):
            if year > 0:
                balance = balance * (1 + self.annual_return_rate) + self.annual_contribution
            yield self._point(year, balance)

    def _monthly(self) -> Iterator[ProjectionPoint]:
        payment = self.annual_contribution / MONTHS_PER_YEAR
        rate = self.annual_return_rate / MONTHS_PER_YEAR
        for year in range(self.years + 1):
            balance = future_value(self.current_balance, payment, rate, year * MONTHS_PER_YEAR)
            yield self._point(year, balance)


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def build_series(
    request: ProjectionRequest,
    *,
    default_annual_return: float = DEFAULT_ANNUAL_RETURN,
    compounding: SeriesCompounding = "annual",
) -> ProjectionSeries:
    rate = request.annual_return_rate
    if rate is None:
        rate = default_annual_return
    return ProjectionSeries(
        current_age=request.current_age,
        years=request.retirement_age - request.current_age,
        current_balance=request.current_balance,
        annual_contribution=annual_contribution(
            request.contribution_type, request.contribution_value, request.annual_salary,
        ),
        annual_return_rate=rate,
        compounding=request.series_compounding or compounding,
    )


def project(
    request: ProjectionRequest,
    *,
    default_annual_return: float = DEFAULT_ANNUAL_RETURN,
    irs_annual_limit: float = DEFAULT_IRS_ANNUAL_LIMIT,
    series_compounding: SeriesCompounding = "annual",
) -> ProjectionResult:
    """Compute summary totals (and the series when requested) for ``request``."""
    rate = request.annual_return_rate
    if rate is None:
        rate = default_annual_return

    years = request.retirement_age - request.current_age
    months = years * MONTHS_PER_YEAR
    yearly = annual_contribution(
        request.contribution_type, request.contribution_value, request.annual_salary,
    )
    monthly = yearly / MONTHS_PER_YEAR

    total = future_value(request.current_balance, monthly, rate / MONTHS_PER_YEAR, months)
    contributed = monthly * months

    series = None
    if request.include_series:
        series = list(
            build_series(
                request,
                default_annual_return=default_annual_return,
                compounding=series_compounding,
            )
        )

    return ProjectionResult(
        total_at_retirement=round_currency(total),
        total_contributions=round_currency(contributed),
        investment_gains=round_currency(total - contributed - request.current_balance),
        monthly_contribution=round(monthly, 2),
        years_to_retirement=years,
        assumed_annual_return=round(rate * 100, 6),
        annual_contribution=round(yearly, 2),
        paycheck_contribution=round(
            paycheck_contribution(
                request.contribution_type, request.contribution_value, request.annual_salary,
            ),
            2,
        ),
        irs_annual_limit=irs_annual_limit,
        exceeds_irs_limit=yearly > irs_annual_limit,
        series=series,
    )


def calculate_projection(payload: Mapping[str, Any], **options: Any) -> ProjectionResult:
    """Validate a raw request mapping and project it.

    Raises InvalidInputError for missing required fields, retirementAge not
    after currentAge, a non-positive salary, or an out-of-range value.
    """
    try:
        request = ProjectionRequest.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidInputError.from_validation_error(exc) from exc
    return project(request, **options)

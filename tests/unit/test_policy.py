"""Tests for ContributionPolicy validation and the apply_update merge."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from nestegg.core.exceptions import InvalidInputError
from nestegg.models.policy import (
    DEFAULT_POLICY,
    ContributionPolicy,
    ContributionRequest,
    ContributionType,
    DemographicSummary,
    PaycheckFrequency,
    PolicyUpdate,
    apply_update,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _update(**overrides) -> PolicyUpdate:
    payload = {"contributionType": "percentage", "contributionValue": 6}
    payload.update(overrides)
    return PolicyUpdate.model_validate(payload)


class TestPolicyUpdate:
    def test_percentage_upper_bound(self):
        with pytest.raises(ValidationError):
            _update(contributionValue=150)

    def test_percentage_100_allowed(self):
        assert _update(contributionValue=100).contribution_value == 100

    def test_fixed_amount_above_100_allowed(self):
        update = _update(contributionType="fixed", contributionValue=500)
        assert update.contribution_type is ContributionType.FIXED

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError):
            _update(contributionType="fixed", contributionValue=-5)

    def test_retirement_must_follow_current_age(self):
        with pytest.raises(ValidationError):
            _update(currentAge=40, retirementAge=40)

    def test_request_strips_user_id(self):
        request = ContributionRequest.model_validate(
            {"userId": "u1", "contributionType": "fixed", "contributionValue": 200}
        )
        update = request.to_update()
        assert request.user_id == "u1"
        assert update.contribution_value == 200
        assert not hasattr(update, "user_id")


class TestApplyUpdate:
    def test_first_upsert_fills_defaults(self):
        policy = apply_update(None, "new-user", _update(), NOW)
        assert policy.user_id == "new-user"
        assert policy.annual_salary == DEFAULT_POLICY.annual_salary
        assert policy.current_age == 30
        assert policy.retirement_age == 65
        assert policy.employer_match_percent == 3.0
        assert policy.paycheck_frequency is PaycheckFrequency.BIWEEKLY
        assert policy.year_to_date_contributions == 0.0
        assert policy.last_updated == NOW

    def test_overrides_replace_base_values(self):
        policy = apply_update(None, "u", _update(annualSalary=90000, currentAge=40, retirementAge=67), NOW)
        assert policy.annual_salary == 90000
        assert policy.current_age == 40
        assert policy.retirement_age == 67

    def test_existing_fields_survive_when_not_overridden(self):
        existing = apply_update(None, "u", _update(annualSalary=120000), NOW)
        existing = existing.model_copy(update={"year_to_date_contributions": 4200.0})
        later = NOW + timedelta(days=1)
        policy = apply_update(existing, "u", _update(contributionType="fixed", contributionValue=250), later)
        assert policy.annual_salary == 120000
        assert policy.year_to_date_contributions == 4200.0
        assert policy.contribution_type is ContributionType.FIXED
        assert policy.contribution_value == 250
        assert policy.last_updated == later

    def test_merged_record_is_revalidated(self):
        existing = apply_update(None, "u", _update(), NOW)  # retirement age 65
        with pytest.raises(InvalidInputError) as info:
            apply_update(existing, "u", _update(currentAge=70), NOW)
        assert info.value.errors[0].field == "retirementAge"
        assert info.value.errors[0].reason == "out_of_range"

    def test_same_update_twice_differs_only_in_timestamp(self):
        first = apply_update(None, "u", _update(), NOW)
        second = apply_update(first, "u", _update(), NOW + timedelta(seconds=5))
        assert first.same_settings(second)
        assert first.last_updated != second.last_updated

    def test_defaults_constant_is_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_POLICY.annual_salary = 1.0


class TestSerialization:
    def test_json_uses_camel_case(self):
        data = apply_update(None, "u", _update(), NOW).to_json_dict()
        assert data["userId"] == "u"
        assert data["contributionType"] == "percentage"
        assert data["paycheckFrequency"] == "biweekly"
        assert data["lastUpdated"].startswith("2024-05-01T12:00:00")

    def test_round_trips_through_json(self):
        policy = apply_update(None, "u", _update(), NOW)
        assert ContributionPolicy.model_validate_json(policy.model_dump_json(by_alias=True)) == policy

    def test_demographic_summary(self):
        summary = DemographicSummary.from_policy(apply_update(None, "u", _update(annualSalary=80000), NOW))
        assert summary.to_json_dict() == {
            "userId": "u",
            "annualSalary": 80000.0,
            "currentAge": 30,
            "retirementAge": 65,
            "employerMatchPercent": 3.0,
            "paycheckFrequency": "biweekly",
        }

    def test_biweekly_has_26_periods(self):
        assert PaycheckFrequency.BIWEEKLY.periods_per_year == 26

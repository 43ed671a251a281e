"""Tests for ContributionService over a memory store."""

from __future__ import annotations

import pytest

from nestegg.core.exceptions import InvalidInputError, NotFoundError
from nestegg.models.policy import PolicyUpdate
from nestegg.persistence.memory_backend import MemoryPolicyStore
from nestegg.services.contribution_service import ContributionService


@pytest.fixture
def store():
    return MemoryPolicyStore()


@pytest.fixture
def service(store):
    return ContributionService(store=store)


def _update(**overrides) -> PolicyUpdate:
    payload = {"contributionType": "percentage", "contributionValue": 8}
    payload.update(overrides)
    return PolicyUpdate.model_validate(payload)


def test_get_unknown_user_raises(service):
    with pytest.raises(NotFoundError):
        service.get_policy("ghost")


def test_save_then_get(service):
    saved = service.save_policy("u1", _update())
    assert service.get_policy("u1") == saved


def test_rejected_update_leaves_store_untouched(service, store):
    before = service.save_policy("u1", _update())
    with pytest.raises(InvalidInputError):
        service.save_policy("u1", _update(currentAge=80))
    assert store.get("u1") == before


def test_rejected_first_update_creates_nothing(service, store):
    with pytest.raises(InvalidInputError):
        service.save_policy("u2", _update(retirementAge=20))
    assert "u2" not in store


def test_demographics(service):
    service.save_policy("u1", _update(annualSalary=64000))
    summary = service.get_demographics("u1")
    assert summary.annual_salary == 64000
    assert summary.user_id == "u1"


def test_store_ready(service):
    assert service.store_ready() is True

"""ContributionService: reads and saves contribution policies.

Thin layer over an injected IPolicyStore; the store does the merge and
validation, this adds logging and the read-only demographic view.
"""

from __future__ import annotations

from loguru import logger

from nestegg.core.exceptions import InvalidInputError
from nestegg.core.protocols import IPolicyStore
from nestegg.models.policy import ContributionPolicy, DemographicSummary, PolicyUpdate


class ContributionService:
    """Policy reads and upserts for the HTTP layer."""

    def __init__(self, *, store: IPolicyStore) -> None:
        self._store = store

    def get_policy(self, user_id: str) -> ContributionPolicy:
        return self._store.get(user_id)

    def save_policy(self, user_id: str, update: PolicyUpdate) -> ContributionPolicy:
        try:
            policy = self._store.upsert(user_id, update)
        except InvalidInputError as exc:
            logger.warning(f"Rejected contribution update for {user_id!r}: {exc}")
            raise
        logger.info(
            f"Updated contribution for {user_id!r}: "
            f"{policy.contribution_type.value}={policy.contribution_value}"
        )
        return policy

    def get_demographics(self, user_id: str) -> DemographicSummary:
        return DemographicSummary.from_policy(self._store.get(user_id))

    def store_ready(self) -> bool:
        return self._store.ping()

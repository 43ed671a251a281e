"""In-memory policy store. Dict-backed, used by default and in unit tests."""

from __future__ import annotations

from nestegg.core.exceptions import NotFoundError
from nestegg.core.types import Clock
from nestegg.models.policy import ContributionPolicy, PolicyUpdate, apply_update, utcnow


class MemoryPolicyStore:
    """Dict-backed IPolicyStore. Records live for the life of the process."""

    def __init__(self, clock: Clock = utcnow) -> None:
        self._records: dict[str, ContributionPolicy] = {}
        self._clock = clock

    def get(self, user_id: str) -> ContributionPolicy:
        try:
            return self._records[user_id].model_copy()
        except KeyError:
            raise NotFoundError(user_id) from None

    def upsert(self, user_id: str, update: PolicyUpdate) -> ContributionPolicy:
        policy = apply_update(self._records.get(user_id), user_id, update, self._clock())
        self._records[user_id] = policy
        return policy.model_copy()

    def put(self, policy: ContributionPolicy) -> None:
        self._records[policy.user_id] = policy.model_copy()

    def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._records

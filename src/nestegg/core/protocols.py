"""Protocol interfaces for NestEgg abstractions.

Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nestegg.models.policy import ContributionPolicy, PolicyUpdate


# ---------------------------------------------------------------------------
# Persistence: Policy Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IPolicyStore(Protocol):
    """Keyed store of contribution policies, one record per user id."""

    def get(self, user_id: str) -> ContributionPolicy:
        """Return the stored policy or raise NotFoundError."""
        ...

    def upsert(self, user_id: str, update: PolicyUpdate) -> ContributionPolicy:
        """Merge ``update`` over the existing record (or defaults) and store it."""
        ...

    def put(self, policy: ContributionPolicy) -> None:
        """Store a complete record as-is (seeding, imports)."""
        ...

    def ping(self) -> bool: ...

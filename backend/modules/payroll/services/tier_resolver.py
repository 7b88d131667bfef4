from typing import Optional, Sequence

from ..interfaces.repositories import PerformanceTierRepository, TierRecord


class TierResolver:
    """Maps a completed appointment count onto a performance tier."""

    def __init__(self, tiers: PerformanceTierRepository):
        self.tiers = tiers

    def resolve(self, completed_count: int) -> Optional[TierRecord]:
        return self.select_tier(self.tiers.list_active_tiers(), completed_count)

    @staticmethod
    def select_tier(tiers: Sequence[TierRecord], completed_count: int) -> Optional[TierRecord]:
        """
        Return the first matching tier, highest threshold first.

        Returns None when no tier brackets the count; callers then use a
        multiplier of 1.00 and no tier bonus.
        """
        ordered = sorted(tiers, key=lambda t: t.min_appointments, reverse=True)
        for tier in ordered:
            if completed_count < tier.min_appointments:
                continue
            if tier.max_appointments is None or completed_count <= tier.max_appointments:
                return tier
        return None

"""Market data layer -- venue volumes and the latest-snapshot cache."""

from perpdash.market_data.snapshot_cache import Snapshot, SnapshotCache
from perpdash.market_data.volume import VolumeAdapter

__all__ = ["Snapshot", "SnapshotCache", "VolumeAdapter"]

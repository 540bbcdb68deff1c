"""Zoom-dependent marker clustering.

The engine uses a deliberately simple "greedy-radius" heuristic: entities
are visited in input order and each unassigned entity claims every other
unassigned entity inside a square window around it. The partition is
therefore order dependent, but deterministic for a fixed input order.
"""

from collections.abc import Sequence
from typing import Optional

from geodiscovery.core.config import Settings, settings
from geodiscovery.core.logging import get_logger
from geodiscovery.map.filters import located
from geodiscovery.models.entities import GeoEntity
from geodiscovery.models.map import Cluster, ClusterResult

logger = get_logger()


class ClusterEngine:
    """Groups nearby entities into clusters for the current zoom span."""

    # (zoom span lower bound, proximity threshold) in degrees, coarsest first
    THRESHOLD_BANDS: tuple[tuple[float, float], ...] = ((0.1, 0.08), (0.05, 0.04))
    FINEST_THRESHOLD = 0.02

    def __init__(
        self,
        min_cluster_size: Optional[int] = None,
        bypass_count: Optional[int] = None,
        fine_zoom_cutoff: Optional[float] = None,
        config: Optional[Settings] = None,
    ):
        """Initialize the engine.

        Args:
            min_cluster_size: Smallest group, seed included, emitted as a cluster
            bypass_count: Skip clustering at or below this many entities
            fine_zoom_cutoff: Skip clustering when the zoom span is below this
            config: Settings to read defaults from
        """
        cfg = config or settings
        self.min_cluster_size = (
            min_cluster_size if min_cluster_size is not None else cfg.CLUSTER_MIN_SIZE
        )
        self.bypass_count = (
            bypass_count if bypass_count is not None else cfg.CLUSTER_BYPASS_COUNT
        )
        self.fine_zoom_cutoff = (
            fine_zoom_cutoff
            if fine_zoom_cutoff is not None
            else cfg.CLUSTER_FINE_ZOOM_CUTOFF
        )

    def threshold_for_zoom(self, zoom_level: float) -> float:
        """Proximity threshold in degrees for a viewport span."""
        for lower_bound, threshold in self.THRESHOLD_BANDS:
            if zoom_level > lower_bound:
                return threshold
        return self.FINEST_THRESHOLD

    def should_cluster(self, candidate_count: int, zoom_level: float) -> bool:
        """Clustering only runs when markers would visually crowd."""
        return (
            candidate_count > self.bypass_count and zoom_level >= self.fine_zoom_cutoff
        )

    def cluster(
        self, entities: Sequence[GeoEntity], zoom_level: float
    ) -> ClusterResult:
        """Partition entities into clusters and individual markers.

        Args:
            entities: Candidate entities in render order
            zoom_level: Viewport span in coordinate degrees

        Returns:
            Clusters plus the entities left unclustered, both in input order
        """
        candidates = located(entities)

        if not self.should_cluster(len(candidates), zoom_level):
            return ClusterResult(unclustered=tuple(candidates))

        threshold = self.threshold_for_zoom(zoom_level)
        assigned: set[int] = set()
        clusters: list[Cluster] = []

        for i, seed in enumerate(candidates):
            if i in assigned:
                continue

            seed_coords = seed.coordinates
            group = [i]
            for j, other in enumerate(candidates):
                if j == i or j in assigned:
                    continue
                coords = other.coordinates
                if (
                    abs(coords.latitude - seed_coords.latitude) < threshold  # type: ignore[union-attr]
                    and abs(coords.longitude - seed_coords.longitude) < threshold  # type: ignore[union-attr]
                ):
                    group.append(j)

            if len(group) < self.min_cluster_size:
                continue

            members = [candidates[k] for k in group]
            assigned.update(group)
            clusters.append(
                Cluster(
                    id=f"cluster-{len(clusters)}",
                    centroid_latitude=sum(m.coordinates.latitude for m in members)  # type: ignore[union-attr]
                    / len(members),
                    centroid_longitude=sum(m.coordinates.longitude for m in members)  # type: ignore[union-attr]
                    / len(members),
                    count=len(members),
                    members=tuple(members),
                )
            )

        unclustered = tuple(
            entity for k, entity in enumerate(candidates) if k not in assigned
        )

        logger.debug(
            "clustered_entities",
            zoom_level=zoom_level,
            threshold=threshold,
            clusters=len(clusters),
            unclustered=len(unclustered),
        )
        return ClusterResult(clusters=tuple(clusters), unclustered=unclustered)

# File: src/wall_opening_generator/crossing/crossing_finder.py
"""
Duct-through-wall crossing detection.

Casts a duct centerline as a ray against the candidate walls, discards
hits beyond the end of the duct and collapses multiple hits against the
same logical wall into one crossing.

A ray passing through a wall solid typically reports several hits for the
same wall (entry face, exit face, layer boundaries, tessellated faces of a
linked wall). Walls are compared by their compound ElementKey, so two hits
are duplicates iff they share both container and local id.
"""

from typing import Iterable, List, Sequence
import logging
import math

from wall_opening_generator.core.errors import (
    HostQueryError,
    InvalidSegment,
    OpeningGeneratorError,
)
from wall_opening_generator.core.geometry import (
    is_finite_vector,
    is_unit_vector,
    normalize_vector,
    subtract,
    vector_length,
)
from wall_opening_generator.core.host_interfaces import RayCaster
from wall_opening_generator.core.opening_types import (
    Crossing,
    ElementKey,
    Point3,
    Segment,
    SurfaceCandidate,
)
from wall_opening_generator.utils.logging_config import TRACE_LEVEL

logger = logging.getLogger(__name__)

DEFAULT_UNIT_TOLERANCE = 1e-6


def validate_segment(
    segment: Segment,
    unit_tolerance: float = DEFAULT_UNIT_TOLERANCE
) -> None:
    """
    Check that a segment is a well-formed bounded ray.

    Args:
        segment: Segment to check
        unit_tolerance: Allowed deviation of |direction| from 1.0

    Raises:
        InvalidSegment: If origin/direction/length are unusable
    """
    if not is_finite_vector(segment.origin):
        raise InvalidSegment(
            f"Segment origin is not finite: {segment.origin}",
            extra={"origin": segment.origin},
        )

    if not is_finite_vector(segment.direction) or vector_length(segment.direction) < 1e-10:
        raise InvalidSegment(
            f"Segment direction is degenerate: {segment.direction}",
            extra={"direction": segment.direction},
        )

    if not is_unit_vector(segment.direction, unit_tolerance):
        raise InvalidSegment(
            f"Segment direction is not a unit vector "
            f"(length {vector_length(segment.direction):.6f})",
            extra={"direction": segment.direction},
        )

    if not math.isfinite(segment.length) or segment.length < 0:
        raise InvalidSegment(
            f"Segment length must be a finite value >= 0, got {segment.length}",
            extra={"length": segment.length},
        )


def segment_from_endpoints(start: Point3, end: Point3) -> Segment:
    """
    Derive a segment from duct centerline endpoints.

    Args:
        start: Centerline start point (x, y, z)
        end: Centerline end point (x, y, z)

    Returns:
        Segment with origin at start, unit direction toward end

    Raises:
        InvalidSegment: If the endpoints coincide or are not finite
    """
    if not is_finite_vector(start) or not is_finite_vector(end):
        raise InvalidSegment(f"Centerline endpoints are not finite: {start}, {end}")

    delta = subtract(end, start)
    length = vector_length(delta)
    if length < 1e-10:
        raise InvalidSegment(
            f"Centerline endpoints coincide at {start}",
            extra={"start": start, "end": end},
        )

    return Segment(origin=tuple(start), direction=normalize_vector(delta), length=length)


def filter_by_length(
    crossings: Iterable[Crossing],
    length: float,
    tolerance: float = 0.0
) -> List[Crossing]:
    """
    Drop crossings the duct does not physically reach.

    Args:
        crossings: Raw crossings
        length: Segment length
        tolerance: Extra distance accepted past the segment end

    Returns:
        Crossings with proximity <= length + tolerance
    """
    limit = length + tolerance
    return [c for c in crossings if c.proximity <= limit]


def deduplicate_crossings(crossings: Iterable[Crossing]) -> List[Crossing]:
    """
    Keep one crossing per logical wall.

    The first crossing encountered for each ElementKey wins; later
    crossings for the same key are treated as geometric noise.

    Args:
        crossings: Crossings in traversal order

    Returns:
        Crossings with unique keys, preserving first-seen order
    """
    seen = set()
    unique = []

    for crossing in crossings:
        if crossing.key in seen:
            continue
        seen.add(crossing.key)
        unique.append(crossing)

    return unique


def find_crossings(
    segment: Segment,
    candidates: Sequence[SurfaceCandidate],
    ray_caster: RayCaster,
    length_tolerance: float = 0.0,
    unit_tolerance: float = DEFAULT_UNIT_TOLERANCE
) -> List[Crossing]:
    """
    Find every distinct wall a duct segment passes through.

    Args:
        segment: Duct centerline
        candidates: Walls to test against (may be empty)
        ray_caster: Intersection primitive
        length_tolerance: Extra distance accepted past the segment end
        unit_tolerance: Allowed deviation of |direction| from 1.0

    Returns:
        One crossing per intersected wall, nearest-first when the caster
        reports hits in distance order

    Raises:
        InvalidSegment: If the segment is malformed
        HostQueryError: If the ray caster fails
    """
    validate_segment(segment, unit_tolerance)

    if not candidates:
        return []

    candidate_keys = {c.key for c in candidates}

    def _admit(key: ElementKey) -> bool:
        return key in candidate_keys

    try:
        raw = ray_caster.cast(
            segment.origin,
            segment.direction,
            segment.length,
            _admit,
        )
    except OpeningGeneratorError:
        raise
    except Exception as e:
        raise HostQueryError(
            f"Ray cast from {segment.origin} failed: {e}",
            extra={"origin": segment.origin},
        ) from e

    if logger.isEnabledFor(TRACE_LEVEL):
        for hit in raw:
            logger.log(
                TRACE_LEVEL,
                f"Raw hit on wall {hit.key} at {hit.proximity:.6f} ({hit.point})"
            )

    # Casters are free to ignore the filter; enforce it here too
    admitted = [c for c in raw if c.key in candidate_keys]
    within = filter_by_length(admitted, segment.length, length_tolerance)
    crossings = deduplicate_crossings(within)

    logger.debug(
        f"Segment from {segment.origin}: {len(raw)} raw hits, "
        f"{len(within)} within length, {len(crossings)} walls"
    )
    return crossings

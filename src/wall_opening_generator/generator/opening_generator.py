# File: src/wall_opening_generator/generator/opening_generator.py
"""
Batch generation of duct openings.

Runs every duct through the crossing finder and the placement planner and
hands each placement request to an OpeningCreator. Failures are isolated:

- InvalidSegment / InvalidDuctGeometry / HostQueryError skip the duct
- UnresolvedHost / OpeningCreationError skip the crossing

Each duct's openings are created inside their own transaction scope, so
the run commits duct by duct rather than atomically. Without a creator the
generator only plans, which is how the planning service uses it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence
import json
import logging

from wall_opening_generator.config.opening_config import OpeningConfig
from wall_opening_generator.core.errors import (
    HostQueryError,
    InvalidDuctGeometry,
    InvalidSegment,
    OpeningCreationError,
    OpeningGeneratorError,
    UnresolvedHost,
)
from wall_opening_generator.core.host_interfaces import (
    LevelResolver,
    OpeningCreator,
    RayCaster,
    TransactionFactory,
    null_transaction,
)
from wall_opening_generator.core.opening_types import (
    DuctRecord,
    ElementKey,
    PlacementRequest,
    SurfaceCandidate,
)
from wall_opening_generator.crossing.crossing_finder import (
    find_crossings,
    segment_from_endpoints,
)
from wall_opening_generator.placement.placement_planner import (
    opening_size_for_duct,
    plan_opening,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Report Types
# ============================================================================

# Errors that skip a whole duct / a single crossing
DUCT_SKIP_ERRORS = (InvalidSegment, InvalidDuctGeometry, HostQueryError)
CROSSING_SKIP_ERRORS = (UnresolvedHost, OpeningCreationError)


class SkipReason(Enum):
    """Why a duct or crossing produced no opening (the error's ``code``)."""
    INVALID_SEGMENT = InvalidSegment.code
    INVALID_DUCT_GEOMETRY = InvalidDuctGeometry.code
    HOST_QUERY_FAILED = HostQueryError.code
    UNRESOLVED_HOST = UnresolvedHost.code
    CREATION_FAILED = OpeningCreationError.code

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_error(cls, error: OpeningGeneratorError) -> "SkipReason":
        return cls(error.code)


@dataclass
class SkipRecord:
    """A duct or crossing that was skipped, with the reason."""
    duct_id: Any
    reason: SkipReason
    message: str
    wall_key: Optional[ElementKey] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "duct_id": self.duct_id,
            "reason": self.reason.value,
            "message": self.message,
        }
        if self.wall_key is not None:
            result["wall_key"] = self.wall_key.to_dict()
        return result


@dataclass
class PlacedOpening:
    """A placement request and the host handle it produced (if any)."""
    duct_id: Any
    request: PlacementRequest
    handle: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "duct_id": self.duct_id,
            "request": self.request.to_dict(),
            "handle": None if self.handle is None else str(self.handle),
        }


@dataclass
class OpeningBatchReport:
    """Result of an opening generation run."""
    ducts_processed: int = 0
    crossings_found: int = 0
    placed: List[PlacedOpening] = field(default_factory=list)
    skipped_ducts: List[SkipRecord] = field(default_factory=list)
    skipped_crossings: List[SkipRecord] = field(default_factory=list)
    plan_only: bool = False

    @property
    def requests(self) -> List[PlacementRequest]:
        return [p.request for p in self.placed]

    def skip_counts(self) -> Dict[str, int]:
        """
        Count skips per reason across ducts and crossings.

        Returns:
            Dictionary mapping reason value -> count (only non-zero reasons)
        """
        counts: Dict[str, int] = {}
        for record in self.skipped_ducts + self.skipped_crossings:
            counts[record.reason.value] = counts.get(record.reason.value, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "placed": [p.to_dict() for p in self.placed],
            "skipped_ducts": [s.to_dict() for s in self.skipped_ducts],
            "skipped_crossings": [s.to_dict() for s in self.skipped_crossings],
            "summary": {
                "ducts_processed": self.ducts_processed,
                "crossings_found": self.crossings_found,
                "openings": len(self.placed),
                "skipped_ducts": len(self.skipped_ducts),
                "skipped_crossings": len(self.skipped_crossings),
                "skip_reasons": self.skip_counts(),
                "plan_only": self.plan_only,
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def get_report_info_string(self) -> str:
        """
        Generate a human-readable summary of the run.

        Returns:
            Multi-line summary with counts per skip reason
        """
        verb = "Planned" if self.plan_only else "Placed"
        lines = [
            "Duct Opening Results",
            "=" * 30,
            f"Ducts processed: {self.ducts_processed}",
            f"Wall crossings found: {self.crossings_found}",
            f"{verb} openings: {len(self.placed)}",
            "",
            f"Skipped ducts: {len(self.skipped_ducts)}",
            f"Skipped crossings: {len(self.skipped_crossings)}",
        ]

        for reason, count in sorted(self.skip_counts().items()):
            lines.append(f"  {reason}: {count}")

        for record in self.skipped_ducts + self.skipped_crossings:
            where = f"duct {record.duct_id}"
            if record.wall_key is not None:
                where += f" / wall {record.wall_key}"
            lines.append(f"  - {where}: {record.message}")

        return "\n".join(lines)


# ============================================================================
# Generator
# ============================================================================

class OpeningGenerator:
    """
    Places an opening at every duct/wall crossing.

    Example:
        >>> generator = OpeningGenerator(ray_caster, level_resolver, creator,
        ...                              transaction_factory=scope)
        >>> report = generator.generate(ducts, walls, family_symbol)
        >>> print(report.get_report_info_string())
    """

    def __init__(
        self,
        ray_caster: RayCaster,
        level_resolver: LevelResolver,
        creator: Optional[OpeningCreator] = None,
        transaction_factory: Optional[TransactionFactory] = None,
        config: Optional[OpeningConfig] = None
    ):
        """
        Initialize the generator with its host collaborators.

        Args:
            ray_caster: Intersection primitive
            level_resolver: Wall -> level lookup
            creator: Opening creator; None runs in plan-only mode
            transaction_factory: Callable returning a transaction scope per duct
            config: Run configuration (defaults to OpeningConfig())
        """
        self.ray_caster = ray_caster
        self.level_resolver = level_resolver
        self.creator = creator
        self.transaction_factory = transaction_factory or null_transaction
        self.config = config or OpeningConfig()

    @property
    def plan_only(self) -> bool:
        return self.creator is None

    def generate(
        self,
        ducts: Iterable[DuctRecord],
        candidates: Sequence[SurfaceCandidate],
        family_definition: Any = None
    ) -> OpeningBatchReport:
        """
        Process every duct once.

        Args:
            ducts: Ducts from the mechanical model
            candidates: Walls to test against (read-only, shared by all ducts)
            family_definition: Host opening type passed to the creator

        Returns:
            OpeningBatchReport with placed openings and skip records
        """
        report = OpeningBatchReport(plan_only=self.plan_only)
        candidates = list(candidates)

        logger.info(
            f"Generating openings for ducts against {len(candidates)} wall candidates"
            f"{' (plan only)' if self.plan_only else ''}"
        )

        for duct in ducts:
            report.ducts_processed += 1
            self._process_duct(duct, candidates, family_definition, report)

        logger.info(
            f"Processed {report.ducts_processed} ducts: {report.crossings_found} crossings, "
            f"{len(report.placed)} openings, {len(report.skipped_ducts)} ducts skipped, "
            f"{len(report.skipped_crossings)} crossings skipped"
        )
        return report

    def _process_duct(
        self,
        duct: DuctRecord,
        candidates: List[SurfaceCandidate],
        family_definition: Any,
        report: OpeningBatchReport
    ) -> None:
        try:
            segment = segment_from_endpoints(duct.start, duct.end)
            diameter = opening_size_for_duct(duct)
            crossings = find_crossings(
                segment,
                candidates,
                self.ray_caster,
                length_tolerance=self.config.length_tolerance,
                unit_tolerance=self.config.unit_tolerance,
            )
        except DUCT_SKIP_ERRORS as e:
            self._skip_duct(report, duct, e)
            return

        report.crossings_found += len(crossings)
        logger.debug(f"Duct {duct.id}: {len(crossings)} wall crossings")

        if not crossings:
            return

        transaction_name = f"{self.config.placement_transaction_name}: {duct.id}"
        with self.transaction_factory(transaction_name):
            for crossing in crossings:
                try:
                    request = plan_opening(segment, crossing, diameter, self.level_resolver)
                    handle = None
                    if self.creator is not None:
                        handle = self.creator.create_opening(request, family_definition)
                except CROSSING_SKIP_ERRORS as e:
                    self._skip_crossing(report, duct, crossing.key, e)
                    continue

                report.placed.append(PlacedOpening(duct_id=duct.id, request=request, handle=handle))

    def _skip_duct(
        self,
        report: OpeningBatchReport,
        duct: DuctRecord,
        error: OpeningGeneratorError
    ) -> None:
        reason = SkipReason.for_error(error)
        logger.warning(f"Skipping duct {duct.id} ({reason}): {error}")
        report.skipped_ducts.append(
            SkipRecord(duct_id=duct.id, reason=reason, message=str(error))
        )

    def _skip_crossing(
        self,
        report: OpeningBatchReport,
        duct: DuctRecord,
        wall_key: ElementKey,
        error: OpeningGeneratorError
    ) -> None:
        reason = SkipReason.for_error(error)
        logger.warning(f"Skipping opening for duct {duct.id} in wall {wall_key} ({reason}): {error}")
        report.skipped_crossings.append(
            SkipRecord(duct_id=duct.id, reason=reason, message=str(error), wall_key=wall_key)
        )


def generate_openings(
    ducts: Iterable[DuctRecord],
    candidates: Sequence[SurfaceCandidate],
    ray_caster: RayCaster,
    level_resolver: LevelResolver,
    creator: Optional[OpeningCreator] = None,
    family_definition: Any = None,
    transaction_factory: Optional[TransactionFactory] = None,
    config: Optional[OpeningConfig] = None
) -> OpeningBatchReport:
    """
    Convenience wrapper around OpeningGenerator.generate.

    Args:
        ducts: Ducts from the mechanical model
        candidates: Walls to test against
        ray_caster: Intersection primitive
        level_resolver: Wall -> level lookup
        creator: Opening creator; None runs in plan-only mode
        family_definition: Host opening type passed to the creator
        transaction_factory: Callable returning a transaction scope per duct
        config: Run configuration

    Returns:
        OpeningBatchReport
    """
    generator = OpeningGenerator(
        ray_caster,
        level_resolver,
        creator=creator,
        transaction_factory=transaction_factory,
        config=config,
    )
    return generator.generate(ducts, candidates, family_definition)

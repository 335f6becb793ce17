"""Scheme catalogue loader and read-only graph index.

Loads ``data/entitlements.json`` once per process, validates it with the
catalogue schemas and builds the lookups used by the engine. Edges or
situation entries naming unknown scheme ids are dropped here with a warning
so the resolvers only ever see a consistent graph.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from src.config import settings
from src.models.enums import Nation
from src.schemas.catalogue import (
    ConflictEdge,
    DependencyEdge,
    EntitlementCatalogue,
    EntitlementDefinition,
    SituationDefinition,
)

logger = logging.getLogger(__name__)

DEFAULT_TIME_CRITICAL = frozenset({"lost_job"})


class CatalogueError(Exception):
    """The catalogue file is missing or malformed."""


@dataclass(frozen=True)
class CatalogueIndex:
    """Validated catalogue plus id lookups. Never mutated after load."""

    entitlements: tuple[EntitlementDefinition, ...]
    dependency_edges: tuple[DependencyEdge, ...]
    conflict_edges: tuple[ConflictEdge, ...]
    situations: Mapping[str, SituationDefinition]
    by_id: Mapping[str, EntitlementDefinition]

    def get(self, entitlement_id: str) -> EntitlementDefinition | None:
        return self.by_id.get(entitlement_id)

    @property
    def time_critical_situations(self) -> frozenset[str]:
        flagged = frozenset(s.id for s in self.situations.values() if s.time_critical)
        return flagged or DEFAULT_TIME_CRITICAL


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def build_index(catalogue: EntitlementCatalogue) -> CatalogueIndex:
    """Index a validated catalogue, dropping edges that reference unknown ids."""
    by_id: dict[str, EntitlementDefinition] = {}
    for definition in catalogue.entitlements:
        if definition.id in by_id:
            msg = f"Duplicate entitlement id in catalogue: {definition.id}"
            raise CatalogueError(msg)
        by_id[definition.id] = definition

    dependency_edges: list[DependencyEdge] = []
    for edge in catalogue.dependency_edges:
        if edge.from_id not in by_id or edge.to not in by_id:
            logger.warning("Skipping dependency edge %s -> %s: unknown id", edge.from_id, edge.to)
            continue
        dependency_edges.append(edge)

    conflict_edges: list[ConflictEdge] = []
    for conflict in catalogue.conflict_edges:
        unknown = [i for i in conflict.between if i not in by_id]
        if unknown:
            logger.warning("Skipping conflict edge %s: unknown id(s) %s", conflict.between, unknown)
            continue
        conflict_edges.append(conflict)

    situations: dict[str, SituationDefinition] = {}
    for situation in catalogue.situations:
        known_primary = tuple(i for i in situation.primary_entitlements if i in by_id)
        known_secondary = tuple(i for i in situation.secondary_entitlements if i in by_id)
        dropped = (len(situation.primary_entitlements) + len(situation.secondary_entitlements)
                   - len(known_primary) - len(known_secondary))
        if dropped:
            logger.warning("Situation %s references %d unknown scheme id(s)", situation.id, dropped)
        situations[situation.id] = situation.model_copy(update={
            "primary_entitlements": known_primary,
            "secondary_entitlements": known_secondary,
        })

    return CatalogueIndex(
        entitlements=catalogue.entitlements,
        dependency_edges=tuple(dependency_edges),
        conflict_edges=tuple(conflict_edges),
        situations=MappingProxyType(situations),
        by_id=MappingProxyType(by_id),
    )


def load_catalogue(path: Path) -> CatalogueIndex:
    """Read, validate and index a catalogue file.

    Raises:
        CatalogueError: the file cannot be read or does not match the schema.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        catalogue = EntitlementCatalogue.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        msg = f"Cannot load scheme catalogue from {path}: {exc}"
        raise CatalogueError(msg) from exc

    index = build_index(catalogue)
    logger.info(
        "Loaded catalogue: %d schemes, %d dependency edges, %d conflicts, %d situations",
        len(index.entitlements),
        len(index.dependency_edges),
        len(index.conflict_edges),
        len(index.situations),
    )
    return index


@lru_cache(maxsize=1)
def get_catalogue() -> CatalogueIndex:
    """Process-wide catalogue, loaded on first use."""
    return load_catalogue(settings.catalogue_path)


# ---------------------------------------------------------------------------
# Candidate selection
# ---------------------------------------------------------------------------


def relevant_entitlement_ids(situations: Iterable[str], catalogue: CatalogueIndex) -> list[str]:
    """Scheme ids worth screening for the given life situations.

    Union of the primary and secondary lists of every recognised situation,
    returned in catalogue order. Unrecognised situation ids contribute
    nothing, so an empty or unrecognised list yields no candidates.
    """
    wanted: set[str] = set()
    for situation_id in situations:
        situation = catalogue.situations.get(situation_id)
        if situation is None:
            logger.debug("Ignoring unknown situation id %s", situation_id)
            continue
        wanted.update(situation.primary_entitlements)
        wanted.update(situation.secondary_entitlements)
    return [d.id for d in catalogue.entitlements if d.id in wanted]


def available_entitlements(
    entitlement_ids: Iterable[str],
    catalogue: CatalogueIndex,
    nation: Nation | None,
) -> list[EntitlementDefinition]:
    """Definitions for the given ids that operate in the person's nation.

    An unknown nation is treated as England.
    """
    effective = nation or Nation.ENGLAND
    result: list[EntitlementDefinition] = []
    for entitlement_id in entitlement_ids:
        definition = catalogue.get(entitlement_id)
        if definition is None:
            continue
        if definition.is_available_in(effective):
            result.append(definition)
    return result

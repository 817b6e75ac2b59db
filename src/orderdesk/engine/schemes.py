"""Scheme eligibility: which active schemes apply to a buyer on a given date."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from .types import Distributor, Scheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemePools:
    """Schemes as fetched per scope. Pools may hold more than one buyer's schemes."""

    global_schemes: Sequence[Scheme] = field(default_factory=tuple)
    store_schemes: Sequence[Scheme] = field(default_factory=tuple)
    distributor_schemes: Sequence[Scheme] = field(default_factory=tuple)

    @classmethod
    def from_schemes(cls, schemes: Iterable[Scheme]) -> "SchemePools":
        """Partition a flat list by scope."""
        global_schemes: List[Scheme] = []
        store_schemes: List[Scheme] = []
        distributor_schemes: List[Scheme] = []
        for scheme in schemes:
            if scheme.is_global:
                global_schemes.append(scheme)
            elif scheme.store_id is not None:
                store_schemes.append(scheme)
            else:
                distributor_schemes.append(scheme)
        return cls(tuple(global_schemes), tuple(store_schemes), tuple(distributor_schemes))


def candidate_schemes(pools: SchemePools, distributor: Optional[Distributor]) -> List[Scheme]:
    """Global schemes always; store and distributor scopes only when they target this buyer.

    ``distributor=None`` is an internal store transfer, which only sees global schemes.
    """
    candidates = [scheme for scheme in pools.global_schemes if scheme.is_global]
    if distributor is None:
        return candidates
    if distributor.store_id:
        candidates.extend(s for s in pools.store_schemes if s.store_id == distributor.store_id)
    if distributor.has_special_schemes:
        candidates.extend(s for s in pools.distributor_schemes if s.distributor_id == distributor.id)
    return candidates


def dedupe_schemes(schemes: Iterable[Scheme]) -> List[Scheme]:
    unique: Dict[str, Scheme] = {}
    for scheme in schemes:
        unique.setdefault(scheme.id, scheme)
    return list(unique.values())


def eligible_schemes(pools: SchemePools, distributor: Optional[Distributor], as_of: date) -> List[Scheme]:
    """Active, in-window, non-stopped schemes for ``distributor`` as of ``as_of``.

    New orders pass today's date; edits and analytics pass the order's own date.
    """
    active = [s for s in candidate_schemes(pools, distributor) if s.is_active(as_of)]
    eligible = dedupe_schemes(active)
    logger.debug(
        "%d eligible scheme(s) for %s as of %s",
        len(eligible),
        distributor.id if distributor else "store transfer",
        as_of.isoformat(),
    )
    return eligible


def scheme_source(scheme: Scheme) -> str:
    return scheme.scope.value

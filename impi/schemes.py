"""
Verification schemes.

A scheme says how many import groups a file may have, whether a group may mix
import categories, and in which relative orders the categories may appear.
The set of schemes is closed: new schemes are new registry entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Sequence, Tuple

from .errors import SetupError
from .types import ImportType

ImportOrder = Tuple[ImportType, ...]

DEFAULT_CATEGORY_NAMES: Mapping[ImportType, str] = MappingProxyType(
    {t: t.display_name for t in ImportType}
)


@dataclass(frozen=True)
class Scheme:
    name: str
    max_groups: int
    allow_mixed_types: bool
    allowed_orderings: FrozenSet[ImportOrder]
    category_names: Mapping[ImportType, str] = field(default_factory=lambda: DEFAULT_CATEGORY_NAMES, compare=False)

    def category_name(self, import_type: ImportType) -> str:
        return self.category_names.get(import_type, import_type.display_name)

    def allows_order(self, observed: Sequence[ImportType]) -> bool:
        """
        Whether the observed per-group categories form an allowed ordering.

        LOCAL_OR_THIRD_PARTY (no local prefix configured) matches either of
        the two categories it stands for.
        """
        return any(_order_matches(observed, allowed) for allowed in self.allowed_orderings)


def _order_matches(observed: Sequence[ImportType], allowed: ImportOrder) -> bool:
    if len(observed) != len(allowed):
        return False
    for seen, expected in zip(observed, allowed):
        if seen == expected:
            continue
        if seen is ImportType.LOCAL_OR_THIRD_PARTY and expected in (ImportType.LOCAL, ImportType.THIRD_PARTY):
            continue
        return False
    return True


def ordered_subsequences(base: Sequence[ImportType]) -> FrozenSet[ImportOrder]:
    """Every order-preserving subsequence of base, the empty one included."""
    return frozenset(
        combo
        for size in range(len(base) + 1)
        for combo in combinations(base, size)
    )


def _three_group_scheme(name: str, order: Sequence[ImportType]) -> Scheme:
    return Scheme(
        name=name,
        max_groups=3,
        allow_mixed_types=False,
        allowed_orderings=ordered_subsequences(order),
    )


STD_LOCAL_THIRD_PARTY = "stdLocalThirdParty"
STD_THIRD_PARTY_LOCAL = "stdThirdPartyLocal"

SCHEMES: Mapping[str, Scheme] = MappingProxyType({
    # standard -> local (by local prefix) -> third party
    STD_LOCAL_THIRD_PARTY: _three_group_scheme(
        STD_LOCAL_THIRD_PARTY,
        (ImportType.STD, ImportType.LOCAL, ImportType.THIRD_PARTY),
    ),
    # standard -> third party -> local (by local prefix)
    STD_THIRD_PARTY_LOCAL: _three_group_scheme(
        STD_THIRD_PARTY_LOCAL,
        (ImportType.STD, ImportType.THIRD_PARTY, ImportType.LOCAL),
    ),
})


def list_schemes() -> List[str]:
    return list(SCHEMES)


def resolve_scheme(name: str) -> Scheme:
    try:
        return SCHEMES[name]
    except KeyError:
        raise SetupError(f"Unsupported verification scheme: {name}") from None


__all__ = [
    "Scheme",
    "ImportOrder",
    "SCHEMES",
    "STD_LOCAL_THIRD_PARTY",
    "STD_THIRD_PARTY_LOCAL",
    "ordered_subsequences",
    "list_schemes",
    "resolve_scheme",
]

"""
Sleep Stage Registry
====================

The closed set of sleep stages a catalog image can belong to, in display
order, together with the labels shown to the user.

Stages:
- wake: Wake
- rem:  REM
- n1:   N1
- n2:   N2
- n3:   N3
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Literal, Mapping, Tuple


StageKey = Literal['wake', 'rem', 'n1', 'n2', 'n3']


@dataclass(frozen=True)
class StageMeta:
    """A stage identifier and its display label."""
    key: StageKey
    label: str


STAGE_META: Tuple[StageMeta, ...] = (
    StageMeta(key='wake', label='Wake'),
    StageMeta(key='rem', label='REM'),
    StageMeta(key='n1', label='N1'),
    StageMeta(key='n2', label='N2'),
    StageMeta(key='n3', label='N3'),
)


def build_stage_labels(meta: Iterable[StageMeta]) -> Mapping[StageKey, str]:
    """Build a read-only key -> label lookup, rejecting duplicate keys."""
    labels: Dict[StageKey, str] = {}
    for stage in meta:
        if stage.key in labels:
            raise ValueError(f"Duplicate stage key in registry: {stage.key!r}")
        labels[stage.key] = stage.label
    return MappingProxyType(labels)


STAGE_LABELS: Mapping[StageKey, str] = build_stage_labels(STAGE_META)

STAGE_KEYS: Tuple[StageKey, ...] = tuple(stage.key for stage in STAGE_META)


def get_stage_label(key: str) -> str:
    """Return the display label for a stage key."""
    try:
        return STAGE_LABELS[key]
    except KeyError:
        raise KeyError(f"Unknown stage key: {key!r}. Expected one of {list(STAGE_KEYS)}") from None

"""
Build the Sleep Stage Image Catalog
===================================

Classifies a raw mapping of asset path -> asset reference into catalog
entries using the file name prefix convention:

    w-*   -> wake
    r-*   -> rem
    n1-*  -> n1
    n2-*  -> n2
    n3-*  -> n3

Prefixes are matched case-insensitively. Files matching none of them are
left out of the catalog without raising.

The progressive unlock order and unlock threshold are exported from here as
well, since a quiz UI needs all three together.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd
from loguru import logger

from .stage_registry import STAGE_KEYS, STAGE_LABELS, StageKey


# Evaluated in order, first match wins
STAGE_PREFIXES: Tuple[Tuple[str, StageKey], ...] = (
    ('w-', 'wake'),
    ('r-', 'rem'),
    ('n1-', 'n1'),
    ('n2-', 'n2'),
    ('n3-', 'n3'),
)

PROGRESSIVE_ORDER: Tuple[StageKey, ...] = ('rem', 'n3', 'wake', 'n2', 'n1')
UNLOCK_THRESHOLD = 5


@dataclass(frozen=True)
class CatalogEntry:
    """One classified image asset."""
    stage_key: StageKey
    file_name: str
    src: str


@dataclass(frozen=True)
class CatalogBuildResult:
    """Classified entries plus the paths that did not match any prefix."""
    entries: Tuple[CatalogEntry, ...]
    skipped: Tuple[str, ...] = ()


def file_name_from_path(path: str) -> str:
    """Return the final '/'-separated segment of an asset path."""
    return path.rsplit('/', 1)[-1]


def detect_stage_key(file_name: str) -> Optional[StageKey]:
    """Classify a file name by prefix, or return None if it has no known prefix."""
    lower = file_name.lower()
    for prefix, stage_key in STAGE_PREFIXES:
        if lower.startswith(prefix):
            return stage_key
    return None


def classify_assets(image_modules: Mapping[str, str]) -> CatalogBuildResult:
    """Classify every asset in the map, keeping track of skipped paths."""
    entries: List[CatalogEntry] = []
    skipped: List[str] = []

    for path, src in image_modules.items():
        file_name = file_name_from_path(path)
        stage_key = detect_stage_key(file_name)

        if stage_key is None:
            logger.debug(f"No stage prefix, skipping: {path}")
            skipped.append(path)
            continue

        entries.append(CatalogEntry(stage_key=stage_key, file_name=file_name, src=src))

    return CatalogBuildResult(entries=tuple(entries), skipped=tuple(skipped))


def build_catalog(image_modules: Mapping[str, str]) -> Tuple[CatalogEntry, ...]:
    """Build the catalog from a path -> reference map.

    Entry order follows the iteration order of ``image_modules``.
    """
    return classify_assets(image_modules).entries


@dataclass(frozen=True)
class StageCatalog:
    """Read-only snapshot of the catalog and its unlock settings."""
    entries: Tuple[CatalogEntry, ...]
    skipped: Tuple[str, ...] = ()
    progressive_order: Tuple[StageKey, ...] = field(default=PROGRESSIVE_ORDER, init=False)
    unlock_threshold: int = field(default=UNLOCK_THRESHOLD, init=False)

    def __post_init__(self):
        object.__setattr__(self, 'entries', tuple(self.entries))
        object.__setattr__(self, 'skipped', tuple(self.skipped))

    @classmethod
    def from_assets(cls, image_modules: Mapping[str, str], sort_by_file_name: bool = False) -> 'StageCatalog':
        """Classify ``image_modules`` and wrap the result in a snapshot."""
        result = classify_assets(image_modules)
        entries = result.entries
        if sort_by_file_name:
            entries = tuple(sorted(entries, key=lambda entry: entry.file_name))
        return cls(entries=entries, skipped=result.skipped)

    def __len__(self) -> int:
        return len(self.entries)

    def entries_for_stage(self, stage_key: str) -> Tuple[CatalogEntry, ...]:
        if stage_key not in STAGE_LABELS:
            raise KeyError(f"Unknown stage key: {stage_key!r}")
        return tuple(entry for entry in self.entries if entry.stage_key == stage_key)

    def to_dataframe(self) -> pd.DataFrame:
        """Catalog as a DataFrame with one row per entry."""
        rows: List[Dict[str, str]] = [
            {
                'stage_key': entry.stage_key,
                'stage_label': STAGE_LABELS[entry.stage_key],
                'file_name': entry.file_name,
                'src': entry.src,
            }
            for entry in self.entries
        ]
        return pd.DataFrame(rows, columns=['stage_key', 'stage_label', 'file_name', 'src'])

    def stage_counts(self) -> pd.Series:
        """Number of images per stage, in registry order."""
        counts = self.to_dataframe()['stage_key'].value_counts()
        return counts.reindex(list(STAGE_KEYS), fill_value=0).astype(int)

"""
Sleep Stage Image Catalog
=========================

This package builds the categorized image catalog that drives the sleep
stage quiz: images are classified into wake, rem, n1, n2 and n3 by file name
prefix, and the progressive unlock order and threshold are exported with it.

Directory Structure:
- stage_registry.py: Stage identifiers and display labels
- build_catalog.py: Prefix classification, catalog snapshot, unlock settings
- discover_assets.py: Image directory scan producing the raw asset map
- create_catalog.py: Config-driven catalog creation and CLI
- config_stage_catalog.yaml: Configuration file
"""

from .stage_registry import (
    STAGE_KEYS,
    STAGE_LABELS,
    STAGE_META,
    StageKey,
    StageMeta,
    build_stage_labels,
    get_stage_label,
)
from .build_catalog import (
    PROGRESSIVE_ORDER,
    UNLOCK_THRESHOLD,
    CatalogBuildResult,
    CatalogEntry,
    StageCatalog,
    build_catalog,
    classify_assets,
    detect_stage_key,
    file_name_from_path,
)
from .discover_assets import discover_image_assets

__all__ = [
    "STAGE_KEYS",
    "STAGE_LABELS",
    "STAGE_META",
    "StageKey",
    "StageMeta",
    "build_stage_labels",
    "get_stage_label",
    "PROGRESSIVE_ORDER",
    "UNLOCK_THRESHOLD",
    "CatalogBuildResult",
    "CatalogEntry",
    "StageCatalog",
    "build_catalog",
    "classify_assets",
    "detect_stage_key",
    "file_name_from_path",
    "discover_image_assets",
]

#!/usr/bin/env python3
"""
Create the Sleep Stage Image Catalog
====================================

Builds the image catalog used by the sleep stage quiz.

Operations:
1. Load the YAML configuration
2. Discover image files in the configured image directory
3. Classify each image by its file name prefix (w-, r-, n1-, n2-, n3-)
4. Report per-stage counts and the progressive unlock order

Nothing is written to disk apart from the optional log file.

Usage:
    sleepstages-catalog --config config_stage_catalog.yaml
    sleepstages-catalog --image-dir ./sleep-imgs
"""

import sys
import argparse
import yaml
from pathlib import Path
from typing import Dict, Optional
from loguru import logger
from datetime import datetime

from .build_catalog import StageCatalog
from .discover_assets import DEFAULT_EXTENSIONS, discover_image_assets
from .stage_registry import STAGE_LABELS


class StageCatalogCreator:
    """Discover and classify sleep stage images into a catalog snapshot."""

    def __init__(self, config_path: str, image_dir: Optional[str] = None):
        """Initialize with configuration."""
        self.config_path = self.resolve_config_path(config_path)
        self.config = self.load_config(self.config_path)
        self.setup_logging()

        assets_config = self.config['assets']
        options = self.config.get('options') or {}

        if image_dir is not None:
            self.image_dir = Path(image_dir)
        else:
            # Relative image dirs are resolved against the config file
            self.image_dir = Path(assets_config['image_dir'])
            if not self.image_dir.is_absolute():
                self.image_dir = self.config_path.parent / self.image_dir

        self.extensions = assets_config.get('extensions') or list(DEFAULT_EXTENSIONS)
        self.url_prefix = assets_config.get('url_prefix')
        self.sort_by_file_name = bool(options.get('sort_by_file_name', False))

        self.catalog: Optional[StageCatalog] = None

    @staticmethod
    def resolve_config_path(config_path: str) -> Path:
        """Resolve a relative path against the cwd first, then this module's directory."""
        config_path = Path(config_path)
        if not config_path.is_absolute() and not config_path.exists():
            config_path = Path(__file__).parent / config_path
        return config_path

    def load_config(self, config_path: Path) -> Dict:
        """Load YAML configuration."""
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return config

    def setup_logging(self):
        """Setup logging."""
        options = self.config.get('options') or {}
        log_settings = self.config.get('logging') or {}

        logger.remove()
        logger.add(sys.stderr, level="INFO" if options.get('verbose', True) else "WARNING")

        log_dir = log_settings.get('log_dir')
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = log_dir / f"stage_catalog_{timestamp}.log"
            logger.add(log_file, rotation="10 MB", retention="10 days", level="DEBUG")

        logger.info("="*80)
        logger.info("Sleep Stage Image Catalog")
        logger.info("="*80)

    def discover(self) -> Dict[str, str]:
        """Collect the raw path -> reference map."""
        logger.info(f"Scanning image directory: {self.image_dir}")

        image_modules = discover_image_assets(
            self.image_dir,
            extensions=self.extensions,
            url_prefix=self.url_prefix,
        )

        logger.info(f"Found {len(image_modules)} image files")

        return image_modules

    def build(self, image_modules: Dict[str, str]) -> StageCatalog:
        """Classify the discovered images into a catalog snapshot."""
        catalog = StageCatalog.from_assets(image_modules, sort_by_file_name=self.sort_by_file_name)

        logger.info(f"Catalog contains {len(catalog)} classified images")

        if catalog.skipped:
            logger.info(f"Skipped {len(catalog.skipped)} files without a stage prefix")
            for path in catalog.skipped:
                logger.debug(f"  skipped: {path}")

        return catalog

    def report(self, catalog: StageCatalog):
        """Log per-stage counts and the unlock progression."""
        counts = catalog.stage_counts()

        logger.info("\nImages per stage:")
        for stage_key, count in counts.items():
            logger.info(f"  {STAGE_LABELS[stage_key]:<5} {count}")

        logger.info(f"\nProgressive order (unlock threshold: {catalog.unlock_threshold}):")
        for position, stage_key in enumerate(catalog.progressive_order, start=1):
            logger.info(f"  {position}. {STAGE_LABELS[stage_key]} ({counts[stage_key]} images)")

        empty_stages = [key for key in catalog.progressive_order if counts[key] == 0]
        if empty_stages:
            logger.warning(f"Stages without images: {[STAGE_LABELS[k] for k in empty_stages]}")

    def run(self) -> StageCatalog:
        """Run discovery and classification once."""
        image_modules = self.discover()
        self.catalog = self.build(image_modules)
        self.report(self.catalog)

        logger.info("="*80)
        logger.info("Catalog creation complete!")
        logger.info("="*80)

        return self.catalog


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Build the sleep stage image catalog and report its contents"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config_stage_catalog.yaml",
        help="Path to configuration YAML file"
    )
    parser.add_argument(
        "--image-dir",
        type=str,
        default=None,
        help="Override the image directory from the config"
    )

    args = parser.parse_args()

    creator = StageCatalogCreator(args.config, image_dir=args.image_dir)
    try:
        creator.run()
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

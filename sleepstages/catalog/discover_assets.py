"""
Discover Sleep Stage Images
===========================

Scans an image directory (non-recursively) and returns the raw
path -> reference map consumed by ``build_catalog``. This is the only part
of the catalog pipeline that touches the filesystem.

Extensions are matched case-insensitively, so ``W-01.PNG`` is picked up
along with ``w-01.png``. A bundler glob such as ``*.{png,jpg,jpeg}`` would
skip the upper-case variant.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from loguru import logger


DEFAULT_EXTENSIONS = ('png', 'jpg', 'jpeg')


def discover_image_assets(
    image_dir: Union[str, Path],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    url_prefix: Optional[str] = None,
) -> Dict[str, str]:
    """Map each image file in ``image_dir`` to an asset reference.

    Keys are POSIX paths, sorted. References are ``url_prefix + file name``
    when a prefix is given, otherwise a ``file://`` URI.
    """
    image_dir = Path(image_dir)
    if not image_dir.exists():
        raise FileNotFoundError(f"Image directory not found: {image_dir}")
    if not image_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {image_dir}")

    allowed = {f".{ext.lower().lstrip('.')}" for ext in extensions}
    image_files = sorted(
        p for p in image_dir.iterdir()
        if p.is_file() and p.suffix.lower() in allowed
    )

    assets: Dict[str, str] = {}
    for image_path in image_files:
        if url_prefix is not None:
            src = f"{url_prefix}{image_path.name}"
        else:
            src = image_path.resolve().as_uri()
        assets[image_path.as_posix()] = src

    logger.debug(f"Discovered {len(assets)} image files in {image_dir}")

    return assets

# storage/catalog_store.py

# The catalog is one pretty-printed JSON object: URL -> link record.
# Every save rewrites the whole file through a temp file + os.replace,
# so the file on disk is always a complete JSON document.

import json
import os
from typing import Dict

import aiofiles

from link_catalog.errors import CatalogNotFoundError
from link_catalog.storage.models import Link
from utils.logger import setup_logger

logger = setup_logger("link_catalog.storage")

Catalog = Dict[str, Link]


def catalog_from_json(data) -> Catalog:
    if not isinstance(data, dict):
        raise ValueError("catalog must be a JSON object")
    catalog: Catalog = {}
    for url, entry in data.items():
        if not isinstance(entry, dict):
            logger.warning(f"Ignoring malformed catalog entry for {url}")
            continue
        catalog[url] = Link.from_dict(url, entry)
    return catalog


def catalog_to_json(catalog: Catalog) -> str:
    return json.dumps(
        {url: link.to_dict() for url, link in catalog.items()},
        indent=2,
        ensure_ascii=False,
    )


async def load_catalog(path: str, required: bool = False) -> Catalog:
    """
    Read the catalog file.
    A missing or unreadable file yields an empty catalog, unless `required`,
    in which case CatalogNotFoundError is raised.
    """
    if not os.path.exists(path):
        if required:
            raise CatalogNotFoundError(f"No catalog found at {path}")
        logger.info(f"No existing catalog at {path}, starting fresh")
        return {}

    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            raw = await f.read()
        catalog = catalog_from_json(json.loads(raw))
    except (OSError, ValueError) as e:
        if required:
            raise CatalogNotFoundError(f"Catalog at {path} is not readable: {e}") from e
        logger.warning(f"Catalog at {path} is not readable ({e}), starting fresh")
        return {}

    logger.info(f"Loaded {len(catalog)} links from {path}")
    return catalog


async def save_catalog(path: str, catalog: Catalog) -> None:
    """Overwrite the catalog file with the full mapping."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    tmp_path = f"{path}.tmp"
    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(catalog_to_json(catalog))
        await f.write("\n")
    os.replace(tmp_path, path)
    logger.debug(f"Saved {len(catalog)} links to {path}")

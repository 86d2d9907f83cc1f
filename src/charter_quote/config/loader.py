"""Catalog loading from YAML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from charter_quote.config.catalog import Catalog

logger = logging.getLogger(__name__)


class CatalogNotFoundError(FileNotFoundError):
    """Raised when the configured catalog file does not exist."""


def parse_catalog(data: dict[str, Any] | None) -> Catalog:
    """Validate an already-decoded mapping into a Catalog.

    ``None`` or an empty document yields an empty catalog.
    """
    return Catalog(**(data or {}))


def load_catalog(path: str | Path) -> Catalog:
    """Read and validate a YAML catalog file.

    Raises
    ------
    CatalogNotFoundError
        The file does not exist.
    pydantic.ValidationError
        The document does not match the catalog schema.
    """
    path = Path(path)
    if not path.is_file():
        raise CatalogNotFoundError(f"Catalog file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    catalog = parse_catalog(data)
    logger.info(
        "Loaded catalog %s: %d shared plans, %d charter plans, %d holidays",
        path, len(catalog.shared), len(catalog.charter), len(catalog.holidays),
    )
    return catalog

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from enigma_sim.core.exceptions import CatalogError
from enigma_sim.models.schemas import Catalog

log = logging.getLogger(__name__)


def parse_catalog(data: Mapping[str, Any]) -> Catalog:
    """
    Validate a raw catalog mapping.

    Args:
        data: Mapping with alphabet, rotors, reflectors and defaults

    Returns:
        The validated, immutable Catalog

    Raises:
        CatalogError: if any wiring, notch or default is invalid
    """
    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(
            f"Invalid catalog: {e.error_count()} error(s)",
            {"errors": [error["msg"] for error in e.errors()]},
        ) from e


def load_catalog(path: str | Path) -> Catalog:
    """Load and validate a catalog from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:  # ValueError covers bad JSON and bad UTF-8
        raise CatalogError(
            f"Could not read catalog {path}: {e}",
            {"path": str(path)},
        ) from e

    if not isinstance(data, dict):
        raise CatalogError(
            f"Catalog {path} must contain a JSON object",
            {"path": str(path)},
        )

    catalog = parse_catalog(data)
    log.debug(
        "Loaded catalog %s: %d rotors, %d reflectors",
        path,
        len(catalog.rotors),
        len(catalog.reflectors),
    )
    return catalog

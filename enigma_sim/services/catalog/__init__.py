"""Rotor and reflector catalogs."""

from enigma_sim.services.catalog.loader import load_catalog, parse_catalog
from enigma_sim.services.catalog.standard import M3_CATALOG

__all__ = [
    "M3_CATALOG",
    "load_catalog",
    "parse_catalog",
]

from enigma_sim.core.config import Settings, get_settings
from enigma_sim.models.schemas import Catalog
from enigma_sim.services.catalog import M3_CATALOG, load_catalog
from enigma_sim.services.machine import EnigmaMachine


def get_catalog(settings: Settings | None = None) -> Catalog:
    """Catalog named by the settings, or the built-in M3 catalog."""
    settings = settings or get_settings()
    if settings.uses_builtin_catalog:
        return M3_CATALOG
    return load_catalog(settings.catalog_path)


def create_machine(settings: Settings | None = None) -> EnigmaMachine:
    """Build a machine in its catalog default configuration."""
    return EnigmaMachine(get_catalog(settings))

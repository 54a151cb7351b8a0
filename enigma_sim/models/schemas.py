from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from enigma_sim.core.exceptions import InvalidIndexError


# ============================================================================
# Enums
# ============================================================================


class RotorPosition(str, Enum):
    """Slot of a rotor in the machine, left to right."""

    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"

    @property
    def slot(self) -> int:
        return _POSITION_INDICES[self]

    @classmethod
    def from_index(cls, index: Any) -> "RotorPosition":
        """Map 0/1/2 (or an existing position) to a RotorPosition."""
        if isinstance(index, RotorPosition):
            return index
        # bool is an int subclass but never a valid slot
        if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < 3:
            return _POSITIONS[index]
        raise InvalidIndexError(index)


_POSITIONS = (RotorPosition.LEFT, RotorPosition.MIDDLE, RotorPosition.RIGHT)
_POSITION_INDICES = {position: i for i, position in enumerate(_POSITIONS)}


# ============================================================================
# Catalog Schemas
# ============================================================================


def _check_bijection(alphabet: str, permutation: str, label: str) -> None:
    if len(permutation) != len(alphabet):
        raise ValueError(
            f"{label}: permutation length {len(permutation)}, expected {len(alphabet)}"
        )
    if sorted(permutation) != sorted(alphabet):
        raise ValueError(f"{label}: permutation must use every letter exactly once")


class RotorDefinition(BaseModel):
    """Wiring and turnover notches of a catalog rotor."""

    model_config = ConfigDict(frozen=True)

    permutation: str = Field(min_length=1)
    notch: str = ""

    @field_validator("permutation", "notch")
    @classmethod
    def uppercase_wiring(cls, value: str) -> str:
        return value.upper()


class CatalogDefaults(BaseModel):
    """Initial rotor order and reflector of a freshly built machine."""

    model_config = ConfigDict(frozen=True)

    rotor_order: str
    reflector: str


class Catalog(BaseModel):
    """
    Rotor and reflector catalog a machine is built from.

    Every permutation is checked against the alphabet when the catalog is
    validated, so a machine never sees a non-bijective wiring.
    """

    model_config = ConfigDict(frozen=True)

    alphabet: str = Field(min_length=1)
    rotors: dict[str, RotorDefinition]
    reflectors: dict[str, str]
    defaults: CatalogDefaults

    @field_validator("alphabet")
    @classmethod
    def check_alphabet(cls, value: str) -> str:
        value = value.upper()
        if len(set(value)) != len(value):
            raise ValueError("alphabet must not repeat a letter")
        return value

    @field_validator("rotors")
    @classmethod
    def uppercase_rotor_names(
        cls, value: dict[str, RotorDefinition]
    ) -> dict[str, RotorDefinition]:
        # rotor orders are matched uppercase, so names must be unique ignoring case
        rotors: dict[str, RotorDefinition] = {}
        for name, rotor in value.items():
            key = name.upper()
            if key in rotors:
                raise ValueError(f"rotor name {name!r} collides with another rotor")
            rotors[key] = rotor
        return rotors

    @field_validator("reflectors")
    @classmethod
    def uppercase_reflectors(cls, value: dict[str, str]) -> dict[str, str]:
        return {name: permutation.upper() for name, permutation in value.items()}

    @model_validator(mode="after")
    def check_wirings(self) -> "Catalog":
        alphabet = self.alphabet
        for name, rotor in self.rotors.items():
            _check_bijection(alphabet, rotor.permutation, f"rotor {name}")
            stray = set(rotor.notch) - set(alphabet)
            if stray:
                raise ValueError(
                    f"rotor {name}: notch letters {''.join(sorted(stray))} not in alphabet"
                )
        for name, permutation in self.reflectors.items():
            _check_bijection(alphabet, permutation, f"reflector {name}")
            # reflectors swap letters in pairs
            for i, letter in enumerate(permutation):
                if permutation[alphabet.index(letter)] != alphabet[i]:
                    raise ValueError(
                        f"reflector {name}: {alphabet[i]} maps to {letter} "
                        f"but {letter} does not map back to {alphabet[i]}"
                    )

        names = self.defaults.rotor_order.upper().split("-")
        if len(names) != 3:
            raise ValueError("default rotor order must name exactly 3 rotors")
        missing = [name for name in names if name not in self.rotors]
        if missing:
            raise ValueError(f"default rotor order uses unknown rotors: {missing}")
        if self.defaults.reflector not in self.reflectors:
            raise ValueError(
                f"default reflector {self.defaults.reflector!r} is not in the catalog"
            )
        return self

    def get_rotor(self, name: str) -> RotorDefinition | None:
        """Look up a rotor definition, None if the catalog has no such rotor."""
        return self.rotors.get(name.upper())

    def get_reflector(self, name: str) -> str | None:
        """Look up a reflector permutation, None if the catalog has no such reflector."""
        return self.reflectors.get(name)

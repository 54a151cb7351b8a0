"""Substitution stages the machine is assembled from."""

from enigma_sim.services.components.alphabet import Alphabet
from enigma_sim.services.components.permutation import Permutation
from enigma_sim.services.components.plugboard import Plugboard
from enigma_sim.services.components.rotor import Rotor
from enigma_sim.services.components.trace import EncryptionTrace, LastValue, LastValueBidi

__all__ = [
    "Alphabet",
    "Permutation",
    "Plugboard",
    "Rotor",
    "EncryptionTrace",
    "LastValue",
    "LastValueBidi",
]

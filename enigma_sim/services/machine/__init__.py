"""The assembled machine and its observer contract."""

from enigma_sim.services.machine.machine import STATE_KEYS, EnigmaMachine
from enigma_sim.services.machine.observers import LoggingObserver, MachineObserver

__all__ = [
    "EnigmaMachine",
    "LoggingObserver",
    "MachineObserver",
    "STATE_KEYS",
]

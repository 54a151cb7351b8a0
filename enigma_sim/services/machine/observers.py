import logging
from abc import ABC, abstractmethod

from enigma_sim.models.schemas import RotorPosition
from enigma_sim.services.components.permutation import Permutation
from enigma_sim.services.components.trace import EncryptionTrace


class MachineObserver(ABC):
    """
    Listener for machine changes.

    Observers are called synchronously, in registration order, after each
    change has been committed. An observer must not modify the machine it
    is registered with from inside a callback.
    """

    @abstractmethod
    def on_plugboard_change(self, permutation: Permutation, setting: str) -> None:
        """Plugboard rewired; setting is the canonical pair string."""
        pass

    @abstractmethod
    def on_reflector_change(self, name: str) -> None:
        pass

    @abstractmethod
    def on_rotor_order_change(self, order: str) -> None:
        pass

    @abstractmethod
    def on_rotor_change(self, position: RotorPosition, name: str) -> None:
        """A rotor slot now holds the named rotor; follows on_rotor_order_change."""
        pass

    @abstractmethod
    def on_ring_setting_change(self, value: str) -> None:
        pass

    @abstractmethod
    def on_indicator_change(self, value: str) -> None:
        pass

    @abstractmethod
    def on_ring_locked(self, value: bool) -> None:
        pass

    @abstractmethod
    def on_encrypt(self, trace: EncryptionTrace) -> None:
        """A letter went through the machine; trace holds every stage's pairs."""
        pass


class LoggingObserver(MachineObserver):
    """Writes every machine event to a logger at DEBUG level."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_plugboard_change(self, permutation: Permutation, setting: str) -> None:
        self.logger.debug("plugboard=%r (%s)", setting, permutation.string)

    def on_reflector_change(self, name: str) -> None:
        self.logger.debug("reflector=%s", name)

    def on_rotor_order_change(self, order: str) -> None:
        self.logger.debug("rotor_order=%s", order)

    def on_rotor_change(self, position: RotorPosition, name: str) -> None:
        self.logger.debug("rotor[%s]=%s", position.value, name)

    def on_ring_setting_change(self, value: str) -> None:
        self.logger.debug("ring_setting=%s", value)

    def on_indicator_change(self, value: str) -> None:
        self.logger.debug("indicator=%s", value)

    def on_ring_locked(self, value: bool) -> None:
        self.logger.debug("ring_locked=%s", value)

    def on_encrypt(self, trace: EncryptionTrace) -> None:
        self.logger.debug(
            "encrypt %s -> %s",
            trace.plugboard.forward.input,
            trace.plugboard.inverse.output,
        )

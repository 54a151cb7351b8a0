import logging
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from typing import Literal

from enigma_sim.core.exceptions import (
    EnigmaError,
    InvalidSymbolError,
    UnknownReflectorNameError,
    UnknownRotorNameError,
    WrongFieldLengthError,
)
from enigma_sim.models.schemas import Catalog, RotorPosition
from enigma_sim.services.components.alphabet import Alphabet
from enigma_sim.services.components.permutation import Permutation
from enigma_sim.services.components.plugboard import Plugboard
from enigma_sim.services.components.rotor import Rotor
from enigma_sim.services.components.trace import EncryptionTrace, LastValueBidi
from enigma_sim.services.machine.observers import MachineObserver

log = logging.getLogger(__name__)

RotorField = Literal["indicator", "ring_setting"]

STATE_KEYS = ("rotor_order", "ring_setting", "indicator", "plugboard", "locked")


class EnigmaMachine:
    """
    Three-rotor cipher machine built from a catalog.

    The signal path is plugboard, right, middle and left rotor, reflector,
    then back through the rotors and the plugboard. Every key press first
    steps the rotors.

    Every setter validates its whole input before changing anything, so a
    failed call leaves the machine exactly as it was. Each setter has a
    ``validate_*`` companion that returns "" or the error message without
    raising.

    The machine is not thread-safe; callers sharing one instance must
    serialize access.
    """

    def __init__(self, catalog: Catalog):
        self._observers: list[MachineObserver] = []
        self._catalog = catalog
        self._alphabet = Alphabet(catalog.alphabet)
        self._plugboard = Plugboard(self._alphabet)
        self._rotors: list[Rotor] = []
        self._rotor_order = ""
        self._reflector: Rotor | None = None
        self._reflector_name = ""
        self._ring_locked = True

        self.set_rotor_order(catalog.defaults.rotor_order)
        self.set_reflector(catalog.defaults.reflector)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def add_observer(self, observer: MachineObserver) -> None:
        self._observers.append(observer)

    def _notify(self, event: Callable[[MachineObserver], None]) -> None:
        for observer in self._observers:
            event(observer)

    # ------------------------------------------------------------------
    # Indicator and ring setting
    # ------------------------------------------------------------------

    def get_indicator(self) -> str:
        return self._get_rotor_field("indicator")

    def set_indicator(self, value: str) -> None:
        self._set_rotor_field("indicator", value)

    def set_indicator_at_index(self, index: RotorPosition | int, value: str) -> None:
        self._set_rotor_field_at_index(index, "indicator", value)

    def validate_indicator(self, value: str) -> str:
        return self._validate_rotor_field("indicator", value)

    def get_ring_setting(self) -> str:
        return self._get_rotor_field("ring_setting")

    def set_ring_setting(self, value: str) -> None:
        self._set_rotor_field("ring_setting", value)

    def set_ring_setting_at_index(self, index: RotorPosition | int, value: str) -> None:
        self._set_rotor_field_at_index(index, "ring_setting", value)

    def validate_ring_setting(self, value: str) -> str:
        return self._validate_rotor_field("ring_setting", value)

    def _get_rotor_field(self, field: RotorField) -> str:
        return self._alphabet.from_indices(
            *(getattr(rotor, field) for rotor in self._rotors)
        )

    def _check_rotor_field(self, field: RotorField, value: str) -> str:
        value = value.upper()
        if len(value) != 3:
            raise WrongFieldLengthError(field, len(value))
        for letter in value:
            if not self._alphabet.valid(letter):
                raise InvalidSymbolError(letter)
        return value

    def _validate_rotor_field(self, field: RotorField, value: str) -> str:
        try:
            self._check_rotor_field(field, value)
        except EnigmaError as e:
            return e.message
        return ""

    def _set_rotor_field(self, field: RotorField, value: str) -> None:
        value = self._check_rotor_field(field, value)
        for rotor, letter in zip(self._rotors, value):
            setattr(rotor, field, self._alphabet.index_of(letter))
        log.debug("%s set to %s", field, value)
        self._call_rotor_update(field)

    def _set_rotor_field_at_index(
        self,
        index: RotorPosition | int,
        field: RotorField,
        value: str,
    ) -> None:
        position = RotorPosition.from_index(index)
        if not self._alphabet.valid(value):
            raise InvalidSymbolError(value)
        setattr(self._rotors[position.slot], field, self._alphabet.index_of(value))
        self._call_rotor_update(field)

    def _call_rotor_update(self, field: RotorField) -> None:
        if field == "indicator":
            value = self.get_indicator()
            self._notify(lambda o: o.on_indicator_change(value))
        else:
            value = self.get_ring_setting()
            self._notify(lambda o: o.on_ring_setting_change(value))

    # ------------------------------------------------------------------
    # Rotor order and reflector
    # ------------------------------------------------------------------

    def get_rotor_order(self) -> str:
        return self._rotor_order

    def set_rotor_order(self, value: str | Sequence[str], validate_only: bool = False) -> None:
        """
        Select the rotors by catalog name, left to right, e.g. ``"I-II-III"``.

        The new rotors take over the indicator and ring setting of the
        rotors previously in the same slots.

        Raises:
            UnknownRotorNameError: not exactly three names, or a name is not
                in the catalog
        """
        if isinstance(value, str):
            names = value.upper().split("-")
        else:
            names = [name.upper() for name in value]
        if len(names) != 3:
            raise UnknownRotorNameError(
                "Rotor order must be specified as I-II-III",
                {"count": len(names)},
            )

        new_rotors = []
        for name in names:
            definition = self._catalog.get_rotor(name)
            if definition is None:
                raise UnknownRotorNameError(
                    f"Invalid rotor name: {name}",
                    {"name": name},
                )
            new_rotors.append(Rotor(definition.permutation, definition.notch, self._alphabet))

        if validate_only:
            return

        for new_rotor, old_rotor in zip(new_rotors, self._rotors):
            new_rotor.indicator = old_rotor.indicator
            new_rotor.ring_setting = old_rotor.ring_setting
        self._rotors = new_rotors
        self._rotor_order = "-".join(names)
        log.debug("rotor order set to %s", self._rotor_order)

        order = self._rotor_order
        self._notify(lambda o: o.on_rotor_order_change(order))
        for position, name in zip(RotorPosition, names):
            self._notify(lambda o: o.on_rotor_change(position, name))

    def validate_rotor_order(self, value: str | Sequence[str]) -> str:
        try:
            self.set_rotor_order(value, validate_only=True)
        except EnigmaError as e:
            return e.message
        return ""

    def get_reflector(self) -> str:
        return self._reflector_name

    def set_reflector(self, name: str, validate_only: bool = False) -> None:
        permutation = self._catalog.get_reflector(name)
        if permutation is None:
            raise UnknownReflectorNameError(name)
        if validate_only:
            return

        self._reflector = Rotor(permutation, "", self._alphabet)
        self._reflector_name = name
        log.debug("reflector set to %s", name)
        self._notify(lambda o: o.on_reflector_change(name))

    def validate_reflector(self, name: str) -> str:
        try:
            self.set_reflector(name, validate_only=True)
        except EnigmaError as e:
            return e.message
        return ""

    def get_reflector_permutation(self) -> Permutation:
        return self._reflector.permutation

    # ------------------------------------------------------------------
    # Plugboard and ring lock
    # ------------------------------------------------------------------

    def get_plugboard(self) -> str:
        return self._plugboard.string

    def set_plugboard(self, value: str) -> None:
        self._plugboard.set_to(value)
        log.debug("plugboard set to %r", self._plugboard.string)
        permutation = self._plugboard.permutation
        setting = self._plugboard.string
        self._notify(lambda o: o.on_plugboard_change(permutation, setting))

    def validate_plugboard(self, value: str) -> str:
        return self._plugboard.validate(value)

    def get_plugboard_permutation(self) -> Permutation:
        return self._plugboard.permutation

    @property
    def ring_locked(self) -> bool:
        return self._ring_locked

    def set_ring_locked(self, value: bool) -> None:
        """Store the ring-lock flag; it has no effect on encryption."""
        self._ring_locked = value
        self._notify(lambda o: o.on_ring_locked(value))

    # ------------------------------------------------------------------
    # Stepping and encryption
    # ------------------------------------------------------------------

    def is_valid_letter(self, letter: str) -> bool:
        return self._alphabet.valid(letter)

    def get_last_values(self) -> EncryptionTrace:
        """Return the input/output pairs of every stage for the last letter."""
        left, middle, right = self._rotors
        return EncryptionTrace(
            plugboard=self._bidi(self._plugboard.permutation),
            rotors=(
                self._bidi(left.permutation),
                self._bidi(middle.permutation),
                self._bidi(right.permutation),
            ),
            reflector=self._reflector.permutation.last_forward,
        )

    @staticmethod
    def _bidi(permutation: Permutation) -> LastValueBidi:
        return LastValueBidi(
            forward=permutation.last_forward,
            inverse=permutation.last_inverse,
        )

    def step(self) -> None:
        """
        Advance the rotors by one key press.

        Notches are read before anything moves. A middle rotor on its notch
        turns the left rotor and itself, which makes it move on two
        consecutive key presses (the double step).
        """
        left, middle, right = self._rotors
        middle_on_notch = middle.is_on_notch()
        if middle_on_notch:
            left.step()
        if middle_on_notch or right.is_on_notch():
            middle.step()
        right.step()

        indicator = self.get_indicator()
        self._notify(lambda o: o.on_indicator_change(indicator))

    def encrypt_single_no_step(self, letter: str) -> str:
        """Encrypt one letter with the rotors where they are."""
        if not self._alphabet.valid(letter):
            raise InvalidSymbolError(letter)

        left, middle, right = self._rotors
        x = self._plugboard.forward(letter)
        x = right.forward(x)
        x = middle.forward(x)
        x = left.forward(x)
        x = self._reflector.forward(x)
        x = left.inverse(x)
        x = middle.inverse(x)
        x = right.inverse(x)
        x = self._plugboard.inverse(x)

        trace = self.get_last_values()
        self._notify(lambda o: o.on_encrypt(trace))
        return x

    def step_and_encrypt_single(self, letter: str) -> str:
        """Step, then encrypt one letter, like pressing a key."""
        if not self._alphabet.valid(letter):
            raise InvalidSymbolError(letter)
        self.step()
        return self.encrypt_single_no_step(letter)

    def encrypt_message(self, message: str) -> str:
        """
        Encrypt a message, stepping before each letter.

        The whole message is checked first; if any character is outside the
        alphabet nothing is encrypted and the rotors do not move. Decrypting
        means resetting the machine to the same starting settings and
        encrypting the ciphertext.
        """
        for letter in message:
            if not self._alphabet.valid(letter):
                raise InvalidSymbolError(letter)
        return "".join(self.step_and_encrypt_single(letter) for letter in message)

    # ------------------------------------------------------------------
    # Flat key-value state
    # ------------------------------------------------------------------

    def save_state(self, state: MutableMapping[str, str] | None = None) -> MutableMapping[str, str]:
        """Write all state keys into state (a new dict if None) and return it."""
        if state is None:
            state = {}
        state["rotor_order"] = self.get_rotor_order()
        state["ring_setting"] = self.get_ring_setting()
        state["indicator"] = self.get_indicator()
        state["plugboard"] = self.get_plugboard()
        state["locked"] = "1" if self._ring_locked else "0"
        return state

    def load_state(self, state: Mapping[str, object]) -> list[str]:
        """
        Apply every state key present in state.

        Keys are applied independently; an invalid value is logged and
        skipped, keeping the current value for that field.

        Returns:
            Diagnostic messages for the skipped keys
        """
        setters: dict[str, Callable[[str], None]] = {
            "rotor_order": self.set_rotor_order,
            "ring_setting": self.set_ring_setting,
            "indicator": self.set_indicator,
            "plugboard": self.set_plugboard,
            "locked": self._set_locked_flag,
        }
        diagnostics = []
        for key in STATE_KEYS:
            if key not in state:
                continue
            value = state[key]
            try:
                if not isinstance(value, str):
                    raise EnigmaError(f"expected a string, got {type(value).__name__}")
                setters[key](value)
            except EnigmaError as e:
                message = f"Invalid state value: {key}={value!r} ({e.message})"
                log.warning(message)
                diagnostics.append(message)
        return diagnostics

    def _set_locked_flag(self, value: str) -> None:
        if value == "1":
            self.set_ring_locked(True)
        elif value == "0":
            self.set_ring_locked(False)
        else:
            raise EnigmaError('must be "0" or "1"', {"value": value})

from enigma_sim.services.components.alphabet import Alphabet
from enigma_sim.services.components.permutation import Permutation


class Rotor:
    """
    A machine rotor: a wired permutation turned by two offsets.

    ``indicator`` is the letter showing in the window and ``ring_setting`` is
    the offset of the wiring core against the alphabet ring. Both are stored
    as indices reduced modulo the alphabet length. A reflector is a Rotor
    without notches that never steps.
    """

    def __init__(self, permutation_string: str, notch_string: str, alphabet: Alphabet):
        self.permutation = Permutation(permutation_string, alphabet)
        self.notch_string = notch_string.upper()
        self.notches = frozenset(alphabet.index_of(letter) for letter in self.notch_string)
        self._alphabet = alphabet
        self._indicator = 0
        self._ring_setting = 0

    @property
    def indicator(self) -> int:
        return self._indicator

    @indicator.setter
    def indicator(self, value: int) -> None:
        self._indicator = value % len(self._alphabet)

    @property
    def ring_setting(self) -> int:
        return self._ring_setting

    @ring_setting.setter
    def ring_setting(self, value: int) -> None:
        self._ring_setting = value % len(self._alphabet)

    def forward(self, letter: str) -> str:
        """Pass letter through the rotor from the entry side."""
        offset = self._indicator - self._ring_setting
        letter = self._alphabet.add(offset, letter)
        letter = self.permutation.forward(letter)
        return self._alphabet.add(-offset, letter)

    def inverse(self, letter: str) -> str:
        """Pass letter back through the rotor from the reflector side."""
        offset = self._indicator - self._ring_setting
        letter = self._alphabet.add(offset, letter)
        letter = self.permutation.inverse(letter)
        return self._alphabet.add(-offset, letter)

    def step(self) -> None:
        self.indicator += 1

    def is_on_notch(self) -> bool:
        return self._indicator in self.notches

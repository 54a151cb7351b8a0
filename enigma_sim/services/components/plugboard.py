from enigma_sim.core.exceptions import (
    DuplicatePlugboardLetterError,
    EnigmaError,
    InvalidPlugboardPairError,
)
from enigma_sim.services.components.alphabet import Alphabet
from enigma_sim.services.components.permutation import Permutation


class Plugboard:
    """
    Self-inverse substitution built from letter-pair swaps.

    A setting such as ``"AB FX"`` swaps A with B and F with X; every letter
    that is not plugged maps to itself.
    """

    def __init__(self, alphabet: Alphabet):
        self._alphabet = alphabet
        self.permutation = Permutation(alphabet.string, alphabet)
        self.string = ""

    def forward(self, letter: str) -> str:
        return self.permutation.forward(letter)

    def inverse(self, letter: str) -> str:
        return self.permutation.inverse(letter)

    def set_to(self, pair_string: str) -> None:
        """
        Set the plugboard to the given pairs, e.g. ``"AB FX"``.

        On error the plugboard is unchanged.
        """
        tokens = pair_string.upper().split()
        self.permutation.set_to(self._to_permutation_string(tokens))
        self.string = " ".join(tokens)

    def validate(self, pair_string: str) -> str:
        """Return "" if pair_string is a valid setting, else the error message."""
        try:
            self._to_permutation_string(pair_string.upper().split())
        except EnigmaError as e:
            return e.message
        return ""

    def _to_permutation_string(self, tokens: list[str]) -> str:
        """Build the image string for the given pairs: ['AB', 'DF'] -> 'BACFED...'."""
        out = list(self._alphabet.string)
        for pair in tokens:
            if len(pair) != 2 or pair[0] == pair[1]:
                raise InvalidPlugboardPairError(
                    f'Invalid plugboard pair: "{pair}"',
                    {"pair": pair},
                )
            i = self._alphabet.index_of(pair[0])
            j = self._alphabet.index_of(pair[1])
            # a letter still mapping to itself has not been plugged yet
            if out[i] != pair[0]:
                raise DuplicatePlugboardLetterError(pair[0])
            if out[j] != pair[1]:
                raise DuplicatePlugboardLetterError(pair[1])
            out[i], out[j] = out[j], out[i]
        return "".join(out)

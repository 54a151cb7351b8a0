from collections.abc import Iterator

from enigma_sim.core.exceptions import (
    DuplicateImageError,
    InvalidPermutationLengthError,
    InvalidSymbolError,
)
from enigma_sim.services.components.alphabet import Alphabet
from enigma_sim.services.components.trace import LastValue


class Permutation:
    """
    A permutation (simple substitution) of an alphabet.

    The image string lists, for each alphabet position, the letter it maps
    to. Every lookup records its (input, output) pair in ``last_forward`` or
    ``last_inverse`` so the signal path can be displayed afterwards.
    """

    def __init__(self, permutation_string: str, alphabet: Alphabet):
        self.alphabet = alphabet
        self.last_forward = LastValue()
        self.last_inverse = LastValue()
        self._string = ""
        self._forward_table: dict[str, str] = {}
        self._inverse_table: dict[str, str] = {}
        self.set_to(permutation_string)

    @property
    def string(self) -> str:
        return self._string

    def forward(self, letter: str) -> str:
        """Apply the permutation to letter."""
        letter = letter.upper()
        output = self._lookup(self._forward_table, letter)
        self.last_forward = LastValue(letter, output)
        return output

    def inverse(self, letter: str) -> str:
        """Apply the inverse permutation to letter."""
        letter = letter.upper()
        output = self._lookup(self._inverse_table, letter)
        self.last_inverse = LastValue(letter, output)
        return output

    def set_to(self, permutation_string: str) -> None:
        """
        Replace the permutation.

        Candidate tables are built and checked first and only swapped in once
        the whole string is known to be a bijection, so on error the
        permutation keeps its previous value.

        Raises:
            InvalidPermutationLengthError: length differs from the alphabet
            InvalidSymbolError: an image letter is not in the alphabet
            DuplicateImageError: an image letter occurs twice
        """
        permutation_string = permutation_string.upper()
        if len(permutation_string) != len(self.alphabet):
            raise InvalidPermutationLengthError(
                len(permutation_string), len(self.alphabet)
            )

        forward_table: dict[str, str] = {}
        inverse_table: dict[str, str] = {}
        for plain, i in self.alphabet.each():
            cipher = permutation_string[i]
            self.alphabet.index_of(cipher)
            if cipher in inverse_table:
                raise DuplicateImageError(cipher)
            forward_table[plain] = cipher
            inverse_table[cipher] = plain

        self._string = permutation_string
        self._forward_table = forward_table
        self._inverse_table = inverse_table

    def each_pair(self) -> Iterator[tuple[str, str]]:
        """Yield (plain, cipher) for each letter in alphabet order."""
        yield from zip(self.alphabet.string, self._string)

    def _lookup(self, table: dict[str, str], letter: str) -> str:
        try:
            return table[letter]
        except KeyError:
            raise InvalidSymbolError(letter) from None

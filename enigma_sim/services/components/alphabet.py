from collections.abc import Iterator

from enigma_sim.core.exceptions import InvalidAlphabetError, InvalidSymbolError


class Alphabet:
    """
    Ordered set of symbols with case-insensitive symbol/index lookup.

    All symbols are stored uppercase; lowercase input resolves to the same
    index. Immutable once built, and shared read-only by every permutation
    and rotor of a machine.
    """

    def __init__(self, alphabet: str):
        if not alphabet:
            raise InvalidAlphabetError("Alphabet must not be empty")

        self._string = alphabet.upper()
        self._to_index: dict[str, int] = {}

        for i, letter in enumerate(self._string):
            if letter in self._to_index:
                raise InvalidAlphabetError(
                    f"Alphabet letter {letter} used more than once",
                    {"symbol": letter},
                )
            self._to_index[letter] = i
            self._to_index[letter.lower()] = i

    @property
    def string(self) -> str:
        return self._string

    def __len__(self) -> int:
        return len(self._string)

    def valid(self, letter: str) -> bool:
        """Return True if letter belongs to the alphabet."""
        return letter in self._to_index

    def all_valid(self, text: str) -> bool:
        """Return True if every character of text belongs to the alphabet."""
        return all(character in self._to_index for character in text)

    def index_of(self, letter: str) -> int:
        """Return the 0-based index of letter."""
        try:
            return self._to_index[letter]
        except KeyError:
            raise InvalidSymbolError(letter) from None

    def from_index(self, index: int) -> str:
        """Return the letter at the given 0-based index."""
        return self._string[index]

    def from_indices(self, *indices: int) -> str:
        """Convert a run of indices into a string."""
        return "".join(self._string[index] for index in indices)

    def add(self, a: str | int, b: str | int) -> str:
        """Add two letters (or indices) by position, modulo the alphabet length."""
        if isinstance(a, str):
            a = self.index_of(a)
        if isinstance(b, str):
            b = self.index_of(b)
        return self._string[(a + b) % len(self._string)]

    def each(self) -> Iterator[tuple[str, int]]:
        """Yield (letter, index) for each letter in alphabet order."""
        for i, letter in enumerate(self._string):
            yield letter, i

    def __iter__(self) -> Iterator[str]:
        return iter(self._string)

from typing import Any


class EnigmaError(Exception):
    """Base exception for all machine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidAlphabetError(EnigmaError):
    """Raised when an alphabet string is empty or repeats a symbol."""

    pass


class InvalidSymbolError(EnigmaError):
    """Raised when a symbol is not part of the configured alphabet."""

    def __init__(self, symbol: str):
        super().__init__(
            f"Invalid letter: {symbol}",
            {"symbol": symbol},
        )


class InvalidPermutationLengthError(EnigmaError):
    """Raised when a permutation string does not match the alphabet length."""

    def __init__(self, length: int, expected: int):
        super().__init__(
            f"Invalid permutation: length {length}, expected {expected}",
            {"length": length, "expected": expected},
        )


class DuplicateImageError(EnigmaError):
    """Raised when a permutation string is not a bijection."""

    def __init__(self, symbol: str):
        super().__init__(
            f"Invalid permutation: letter {symbol} used more than once",
            {"symbol": symbol},
        )


class InvalidPlugboardPairError(EnigmaError):
    """Raised when a plugboard token is malformed."""

    pass


class DuplicatePlugboardLetterError(InvalidPlugboardPairError):
    """Raised when a plugboard letter appears in more than one pair."""

    def __init__(self, symbol: str):
        super().__init__(
            f'Plugboard value "{symbol}" used more than once',
            {"symbol": symbol},
        )


class UnknownRotorNameError(EnigmaError):
    """Raised when a rotor order names a rotor missing from the catalog."""

    pass


class UnknownReflectorNameError(EnigmaError):
    """Raised when a reflector name is missing from the catalog."""

    def __init__(self, name: str):
        super().__init__(
            f"Invalid reflector name: {name}",
            {"name": name},
        )


class WrongFieldLengthError(EnigmaError):
    """Raised when an indicator or ring setting is not three symbols long."""

    def __init__(self, field: str, length: int):
        super().__init__(
            f"{field} length must be 3",
            {"field": field, "length": length},
        )


class InvalidIndexError(EnigmaError):
    """Raised when a rotor position is out of range."""

    def __init__(self, index: Any):
        super().__init__(
            f"invalid Rotor index: {index}",
            {"index": index},
        )


class CatalogError(EnigmaError):
    """Raised when a rotor/reflector catalog fails validation."""

    pass

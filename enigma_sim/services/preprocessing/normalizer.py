import re
import unicodedata
from dataclasses import dataclass
from enum import Enum

from enigma_sim.services.components.alphabet import Alphabet


class NormalizationMode(str, Enum):
    """Message normalization modes."""

    STRICT = "strict"  # Alphabet letters only, uppercase
    RAW = "raw"  # Uppercase only, nothing removed


@dataclass
class NormalizedText:
    """Result of message normalization."""

    text: str
    original: str
    removed_chars: dict[str, int]
    mode: NormalizationMode


class MessageNormalizer:
    """
    Prepares free text for the machine and formats its output.

    Handles:
    - Unicode normalization (NFKC)
    - Case conversion
    - Removal of characters outside the machine alphabet
    - Grouping of ciphertext into fixed-size blocks
    """

    def __init__(self, alphabet: Alphabet):
        self.alphabet = alphabet

    def normalize(
        self,
        text: str,
        mode: NormalizationMode = NormalizationMode.STRICT,
    ) -> str:
        """
        Normalize text for encryption.

        Args:
            text: Input text to normalize
            mode: Normalization mode

        Returns:
            Normalized text string
        """
        return self.normalize_full(text, mode).text

    def normalize_full(
        self,
        text: str,
        mode: NormalizationMode = NormalizationMode.STRICT,
    ) -> NormalizedText:
        """Normalize text and report which characters were dropped."""
        original = text
        removed_chars: dict[str, int] = {}

        text = unicodedata.normalize("NFKC", text).upper()

        if mode == NormalizationMode.RAW:
            normalized = text
        else:
            result = []
            for char in text:
                if self.alphabet.valid(char):
                    result.append(char)
                else:
                    removed_chars[char] = removed_chars.get(char, 0) + 1
            normalized = "".join(result)

        return NormalizedText(
            text=normalized,
            original=original,
            removed_chars=removed_chars,
            mode=mode,
        )

    def group(self, text: str, size: int = 5) -> str:
        """Split text into space-separated blocks of size letters (0 = no grouping)."""
        if size <= 0:
            return text
        return " ".join(text[i : i + size] for i in range(0, len(text), size))

    def strip_whitespace(self, text: str) -> str:
        """Remove all whitespace from text."""
        return re.sub(r"\s+", "", text)

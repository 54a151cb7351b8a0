"""Message preprocessing."""

from enigma_sim.services.preprocessing.normalizer import (
    MessageNormalizer,
    NormalizationMode,
    NormalizedText,
)

__all__ = [
    "MessageNormalizer",
    "NormalizationMode",
    "NormalizedText",
]

from dataclasses import dataclass


@dataclass(frozen=True)
class LastValue:
    """Most recent input/output pair seen by one direction of a stage."""

    input: str = ""
    output: str = ""


@dataclass(frozen=True)
class LastValueBidi:
    """Last forward and inverse pairs of a two-way stage."""

    forward: LastValue
    inverse: LastValue


@dataclass(frozen=True)
class EncryptionTrace:
    """Signal path of the last encrypted letter through every stage."""

    plugboard: LastValueBidi
    rotors: tuple[LastValueBidi, LastValueBidi, LastValueBidi]  # left, middle, right
    reflector: LastValue

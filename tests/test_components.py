"""Tests for the alphabet, permutation, rotor and plugboard stages."""

import pytest

from enigma_sim.core.exceptions import (
    DuplicateImageError,
    DuplicatePlugboardLetterError,
    EnigmaError,
    InvalidAlphabetError,
    InvalidPermutationLengthError,
    InvalidPlugboardPairError,
    InvalidSymbolError,
)
from enigma_sim.services.components import Alphabet, LastValue, Permutation, Plugboard, Rotor


class TestAlphabet:
    """Test suite for Alphabet."""

    @pytest.fixture
    def alphabet(self):
        return Alphabet("ABcd")

    def test_valid_is_case_insensitive(self, alphabet):
        """Test that symbol checks ignore case."""
        assert alphabet.valid("B")
        assert alphabet.valid("b")
        assert alphabet.valid("C")
        assert alphabet.valid("c")
        assert not alphabet.valid("X")

    def test_all_valid(self, alphabet):
        """Test checking every letter of a string."""
        assert alphabet.all_valid("cAdAB")
        assert alphabet.all_valid("CADAB")
        assert alphabet.all_valid("cadab")
        assert not alphabet.all_valid("ABX")
        assert alphabet.all_valid("")

    def test_index_of(self, alphabet):
        """Test mapping letters to indices."""
        assert alphabet.index_of("B") == 1
        assert alphabet.index_of("d") == 3

        with pytest.raises(InvalidSymbolError, match="Invalid letter: X"):
            alphabet.index_of("X")

    def test_from_index(self, alphabet):
        """Test mapping indices back to letters."""
        assert alphabet.from_index(1) == "B"
        assert alphabet.from_index(2) == "C"

    def test_from_indices(self, alphabet):
        """Test building a string from several indices."""
        assert alphabet.from_indices(2, 0, 1) == "CAB"
        assert alphabet.from_indices() == ""

    def test_add(self, alphabet):
        """Test shifting a letter around the alphabet."""
        assert alphabet.add("C", 1) == "D"
        assert alphabet.add("C", -1) == "B"
        assert alphabet.add("C", 2) == "A"
        assert alphabet.add(1, "d") == "A"

    def test_each(self, alphabet):
        """Test iterating letters with their indices."""
        assert list(alphabet.each()) == [("A", 0), ("B", 1), ("C", 2), ("D", 3)]

    def test_length_and_string(self, alphabet):
        """Test alphabet size and canonical string."""
        assert len(alphabet) == 4
        assert alphabet.string == "ABCD"

    def test_rejects_repeated_letters(self):
        """Test that a repeated letter is rejected."""
        with pytest.raises(InvalidAlphabetError):
            Alphabet("ABCA")

    def test_rejects_empty(self):
        """Test that an empty alphabet is rejected."""
        with pytest.raises(InvalidAlphabetError):
            Alphabet("")


class TestPermutation:
    """Test suite for Permutation."""

    @pytest.fixture
    def alphabet(self):
        return Alphabet("ABCDEF")

    @pytest.fixture
    def permutation(self, alphabet):
        return Permutation("AcBeFd", alphabet)

    def test_forward_and_inverse(self, permutation):
        """Test forward and inverse lookups."""
        assert permutation.string == "ACBEFD"
        assert permutation.forward("E") == "F"
        assert permutation.forward("e") == "F"
        assert permutation.inverse("E") == "D"
        assert permutation.inverse("e") == "D"

    def test_records_last_values(self, permutation):
        """Test that the last lookup in each direction is recorded."""
        permutation.forward("e")
        permutation.inverse("E")

        assert permutation.last_forward == LastValue("E", "F")
        assert permutation.last_inverse == LastValue("E", "D")

    def test_inverse_undoes_forward(self, alphabet):
        """Test that inverse followed by forward returns the original letter."""
        permutation = Permutation("FDBCAE", alphabet)

        for letter in alphabet:
            assert permutation.inverse(permutation.forward(letter)) == letter
            assert permutation.forward(permutation.inverse(letter)) == letter

    def test_each_pair(self, permutation):
        """Test iterating input and output pairs."""
        observed = dict(permutation.each_pair())

        assert observed == {"A": "A", "B": "C", "C": "B", "D": "E", "E": "F", "F": "D"}

    def test_set_to(self, permutation):
        """Test replacing the permutation."""
        permutation.set_to("FDBcae")

        assert permutation.string == "FDBCAE"
        assert permutation.forward("a") == "F"
        assert permutation.inverse("a") == "E"

    def test_set_to_rejects_wrong_length(self, permutation):
        """Test that a permutation of the wrong length is rejected."""
        with pytest.raises(
            InvalidPermutationLengthError,
            match="Invalid permutation: length 3, expected 6",
        ):
            permutation.set_to("abc")

    def test_set_to_rejects_unknown_letter(self, permutation):
        """Test that a letter outside the alphabet is rejected."""
        with pytest.raises(InvalidSymbolError, match="Invalid letter: X"):
            permutation.set_to("abcdex")

    def test_set_to_rejects_duplicate_image(self, permutation):
        """Test that a letter used twice is rejected."""
        with pytest.raises(
            DuplicateImageError,
            match="Invalid permutation: letter A used more than once",
        ):
            permutation.set_to("ABCDEA")

    def test_failed_set_to_keeps_previous_tables(self, permutation):
        """Test that a rejected permutation leaves the old one in place."""
        permutation.set_to("FDBCAE")

        for bad in ("abc", "abcdex", "abcdea"):
            with pytest.raises(EnigmaError):
                permutation.set_to(bad)

        assert permutation.string == "FDBCAE"
        assert permutation.forward("A") == "F"
        assert permutation.inverse("A") == "E"

    def test_lookup_rejects_unknown_letter(self, permutation):
        """Test that looking up a letter outside the alphabet raises."""
        with pytest.raises(InvalidSymbolError):
            permutation.forward("Z")
        with pytest.raises(InvalidSymbolError):
            permutation.inverse("?")


class TestRotor:
    """Test suite for Rotor."""

    @pytest.fixture
    def rotor(self):
        return Rotor("BFADCE", "BC", Alphabet("ABCDEF"))

    def test_starting_position(self, rotor):
        """Test a new rotor at indicator and ring setting zero."""
        assert rotor.indicator == 0
        assert rotor.ring_setting == 0
        assert rotor.is_on_notch() is False
        assert rotor.forward("a") == "B"
        assert rotor.inverse("b") == "A"

    def test_step(self, rotor):
        """Test that stepping advances the indicator only."""
        rotor.step()

        assert rotor.indicator == 1
        assert rotor.ring_setting == 0
        assert rotor.is_on_notch() is True
        assert rotor.forward("a") == "E"
        assert rotor.inverse("e") == "A"

    def test_offsets_use_modulus(self, rotor):
        """Test that indicator and ring setting wrap modulo the alphabet size."""
        rotor.indicator = -2
        assert rotor.indicator == 4
        rotor.indicator = 7
        assert rotor.indicator == 1
        rotor.ring_setting = 13
        assert rotor.ring_setting == 1

    def test_ring_setting(self, rotor):
        """Test that the ring setting shifts the wiring but not the notch."""
        rotor.ring_setting = 1
        rotor.indicator = 0

        assert rotor.is_on_notch() is False
        assert rotor.forward("a") == "F"
        assert rotor.inverse("f") == "A"

        rotor.step()

        assert rotor.indicator == 1
        assert rotor.ring_setting == 1
        assert rotor.is_on_notch() is True
        assert rotor.forward("a") == "B"
        assert rotor.inverse("b") == "A"

    def test_step_wraps_around(self, rotor):
        """Test stepping past the last letter."""
        rotor.indicator = 5
        rotor.step()

        assert rotor.indicator == 0

    def test_notches(self, rotor):
        """Test notch letters and indices."""
        assert rotor.notch_string == "BC"
        assert rotor.notches == frozenset({1, 2})

    def test_rejects_notch_outside_alphabet(self):
        """Test that a notch letter outside the alphabet is rejected."""
        with pytest.raises(InvalidSymbolError):
            Rotor("BFADCE", "Z", Alphabet("ABCDEF"))


class TestPlugboard:
    """Test suite for Plugboard."""

    @pytest.fixture
    def plugboard(self):
        return Plugboard(Alphabet("ABCDEF"))

    @staticmethod
    def forward_all(plugboard, value):
        return "".join(plugboard.forward(letter) for letter in value)

    def test_regular_setting(self, plugboard):
        """Test wiring two pairs."""
        plugboard.set_to("ab cd")

        assert plugboard.string == "AB CD"
        assert plugboard.forward("A") == "B"
        assert plugboard.inverse("A") == "B"
        assert self.forward_all(plugboard, "ABCDEF") == "BADCEF"

    def test_empty_setting_is_identity(self, plugboard):
        """Test that an empty setting clears the plugboard."""
        plugboard.set_to("AB")
        plugboard.set_to("")

        assert self.forward_all(plugboard, "ABCDEF") == "ABCDEF"
        assert plugboard.string == ""

    def test_setting_is_canonicalised(self, plugboard):
        """Test that extra whitespace and case are normalised."""
        plugboard.set_to("  ab \t  ef\n")

        assert plugboard.string == "AB EF"

    def test_is_self_inverse(self, plugboard):
        """Test that a pair swaps in both directions."""
        plugboard.set_to("AF BE")

        for letter in "ABCDEF":
            assert plugboard.forward(plugboard.forward(letter)) == letter
            assert plugboard.forward(letter) == plugboard.inverse(letter)

    def test_set_to_rejects_reused_letter(self, plugboard):
        """Test that a letter in two pairs is rejected."""
        plugboard.set_to("AB CD")

        with pytest.raises(DuplicatePlugboardLetterError):
            plugboard.set_to("AB AC")

        assert plugboard.string == "AB CD"
        assert self.forward_all(plugboard, "ABCDEF") == "BADCEF"

    def test_set_to_rejects_malformed_pair(self, plugboard):
        """Test that a single letter token is rejected."""
        plugboard.set_to("AB CD")

        with pytest.raises(InvalidPlugboardPairError, match='Invalid plugboard pair: "A"'):
            plugboard.set_to("A")

        assert plugboard.string == "AB CD"

    def test_validate(self, plugboard):
        """Test validation messages for good and bad settings."""
        assert plugboard.validate("AB CD") == ""
        assert plugboard.validate("") == ""
        assert plugboard.validate("A") == 'Invalid plugboard pair: "A"'
        assert plugboard.validate("AA") == 'Invalid plugboard pair: "AA"'
        assert plugboard.validate("AAA") == 'Invalid plugboard pair: "AAA"'
        assert plugboard.validate("AB AC") == 'Plugboard value "A" used more than once'
        assert plugboard.validate("AB CA") == 'Plugboard value "A" used more than once'
        assert plugboard.validate("AX") == "Invalid letter: X"

    def test_validate_does_not_commit(self, plugboard):
        """Test that validating leaves the plugboard unchanged."""
        plugboard.validate("AB CD")

        assert plugboard.string == ""
        assert self.forward_all(plugboard, "ABCDEF") == "ABCDEF"

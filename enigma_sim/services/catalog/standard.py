from enigma_sim.models.schemas import Catalog

# Wirings of the Wehrmacht/Kriegsmarine M3 rotors and reflectors
# (cryptomuseum.com/crypto/enigma/wiring.htm).
M3_CATALOG = Catalog.model_validate(
    {
        "alphabet": "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
        "rotors": {
            "I": {"permutation": "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "notch": "Q"},
            "II": {"permutation": "AJDKSIRUXBLHWTMCQGZNPYFVOE", "notch": "E"},
            "III": {"permutation": "BDFHJLCPRTXVZNYEIWGAKMUSQO", "notch": "V"},
            "IV": {"permutation": "ESOVPZJAYQUIRHXLNFTGKDCMWB", "notch": "J"},
            "V": {"permutation": "VZBRGITYUPSDNHLXAWMJQOFECK", "notch": "Z"},
            "VI": {"permutation": "JPGVOUMFYQBENHZRDKASXLICTW", "notch": "ZM"},
            "VII": {"permutation": "NZJHGRCXMYSWBOUFAIVLPEKQDT", "notch": "ZM"},
            "VIII": {"permutation": "FKQHTLXOCBJSPDZRAMEWNIUYGV", "notch": "ZM"},
        },
        "reflectors": {
            "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
            "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
            "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
        },
        "defaults": {
            "rotor_order": "I-II-III",
            "reflector": "B",
        },
    }
)

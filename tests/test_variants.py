import pytest

from tughra.errors import (
    ConfigurationError,
    MalformedInputError,
    NoInverseError,
    UnknownVariantError,
)
from tughra.key import KeyMaterial
from tughra.variants import (
    VARIANT_REGISTRY,
    AffineVariant,
    create_variant,
    get_variant,
    mod_inverse,
)

KEY = KeyMaterial("password123")
SAMPLE = "Hello, World! 123 ünïcødé ✓"

VARIANT_IDS = [
    "default", "caesar", "xor", "vigenere", "ROT47", "Atbash", "Substitution",
    "Base64", "ASCII", "Affine", "Unicode Shift", "Numeric", "Reversed Caesar",
    "ROT13", "ROT18", "ROT25", "ROT30", "XOR Pro", "Affine Pro", "Substitution Pro",
]
INVOLUTIONS = ["ROT47", "ROT13", "Atbash", "Reversed Caesar", "XOR Pro"]
ASYMMETRIC = ["default", "caesar", "ASCII", "Unicode Shift", "Affine", "Affine Pro",
              "ROT18", "ROT25", "ROT30", "Substitution", "Substitution Pro"]


def test_catalog_is_closed_and_complete():
    assert list(VARIANT_REGISTRY) == VARIANT_IDS


def test_unknown_variant():
    with pytest.raises(UnknownVariantError):
        get_variant("nonexistent")
    with pytest.raises(ConfigurationError):
        create_variant("rot13", KEY)


@pytest.mark.parametrize("name", VARIANT_IDS)
def test_decode_inverts_encode(name):
    v = create_variant(name, KEY)
    assert v.decode(v.encode(SAMPLE)) == SAMPLE


@pytest.mark.parametrize("name", INVOLUTIONS)
def test_involutions_are_self_inverse(name):
    v = create_variant(name, KEY)
    assert v.involution
    assert v.encode(v.encode(SAMPLE)) == SAMPLE
    assert v.decode(SAMPLE) == v.encode(SAMPLE)


@pytest.mark.parametrize("name", ASYMMETRIC)
def test_asymmetric_variants_are_not_self_inverse(name):
    v = create_variant(name, KEY)
    assert not v.involution
    assert v.encode(v.encode("Hello")) != "Hello"


@pytest.mark.parametrize("name", ["xor", "ROT47", "ROT13"])
def test_cycle_insensitive_flags(name):
    assert get_variant(name).cycle_insensitive


@pytest.mark.parametrize("name, plain, cipher", [
    ("ROT13", "Hello, World!", "Uryyb, Jbeyq!"),
    ("ROT47", "Hello", "w6==@"),
    ("Atbash", "Hello", "Svool"),
    ("Substitution", "Hello", "Itssg"),
    ("Substitution Pro", "abc", "qwe"),
    ("Affine", "AFFINE CIPHER", "IHHWVC SWFRCP"),
    ("ROT18", "abz", "str"),
    ("ROT25", "abc", "zab"),
    ("ROT30", "abz", "efd"),
    ("Base64", "Hello", "SGVsbG8="),
    ("Numeric", "Hi!", "72-105-33"),
])
def test_known_outputs(name, plain, cipher):
    v = create_variant(name, KEY)
    assert v.encode(plain) == cipher
    assert v.decode(cipher) == plain


def test_latin_variants_pass_through_other_characters():
    for name in ("ROT13", "ROT18", "Atbash", "Affine", "Substitution", "Reversed Caesar"):
        v = create_variant(name, KEY)
        assert v.encode("123 ,.!? ü✓") == "123 ,.!? ü✓"


def test_rot47_leaves_space_and_non_ascii():
    v = create_variant("ROT47", KEY)
    assert v.encode(" é\n") == " é\n"


def test_key_length_shift_uses_utf8_byte_length():
    v = create_variant("caesar", KeyMaterial("password"))
    assert v.encode("A") == "I"
    assert create_variant("caesar", KeyMaterial("pässword")).encode("A") == "J"


def test_reversed_caesar():
    v = create_variant("Reversed Caesar", KeyMaterial("password"))
    assert v.encode("a") == "h"
    assert v.decode("h") == "a"


def test_vigenere_adds_key_bytes():
    v = create_variant("vigenere", KeyMaterial("password"))
    assert v.encode("A") == "sQ=="


def test_tughra_shifts_by_key_code_points():
    v = create_variant("default", KeyMaterial("abc"))
    assert v.encode("A") == chr(65 + 97)
    assert v.decode(chr(65 + 97)) == "A"


def test_tughra_collapses_duplicate_key_characters():
    v = create_variant("default", KeyMaterial("aab"))
    assert v.encode("AAA") == chr(162) + chr(163) + chr(162)


def test_tughra_key_position_advances_over_punctuation():
    v = create_variant("default", KeyMaterial("ab"))
    assert v.encode("ab") == chr(97 + 97) + chr(98 + 98)
    assert v.encode("a,b") == chr(97 + 97) + chr(44 + 98) + chr(98 + 97)


def test_tughra_wraps_code_point_space():
    v = create_variant("default", KeyMaterial("a"))
    assert v.encode(chr(0x10FFFF)) == chr(96)
    assert v.decode(chr(96)) == chr(0x10FFFF)


def test_xor_pro_position_advances_over_every_character():
    v = create_variant("XOR Pro", KeyMaterial("abcdefgh"))
    assert v.encode("A,B") == chr(65 ^ 97) + chr(44 ^ 98) + chr(66 ^ 99)


def test_xor_pro_stays_in_plane():
    v = create_variant("XOR Pro", KeyMaterial("\uffff" * 8))
    out = v.encode("\U0001F600")
    assert ord(out) >> 16 == 1
    assert v.decode(out) == "\U0001F600"


def test_key_required_variants_reject_short_keys():
    for name in ("caesar", "xor", "vigenere", "ASCII", "Unicode Shift",
                 "Reversed Caesar", "XOR Pro"):
        with pytest.raises(ConfigurationError):
            create_variant(name, KeyMaterial("short"))


def test_keyless_variants_accept_empty_key():
    for name in ("ROT13", "ROT47", "Atbash", "Affine", "Base64", "Numeric"):
        create_variant(name, KeyMaterial(""))


def test_default_requires_non_empty_key():
    with pytest.raises(ConfigurationError):
        create_variant("default", KeyMaterial(""))
    create_variant("default", KeyMaterial("a"))


def test_mod_inverse():
    assert mod_inverse(5, 26) == 21
    assert mod_inverse(4, 26) is None
    assert mod_inverse(13, 26) is None


@pytest.mark.parametrize("a", [0, 2, 4, 13, 26])
def test_affine_without_inverse_fails_at_construction(a):
    with pytest.raises(NoInverseError):
        create_variant("Affine", KEY, affine_a=a)
    with pytest.raises(NoInverseError):
        create_variant("Affine Pro", KEY, affine_a=a)


def test_affine_custom_parameters():
    v = create_variant("Affine Pro", KEY, affine_a=7, affine_b=3)
    assert isinstance(v, AffineVariant)
    assert v.a_inv == 15
    assert v.encode("b") == "k"
    assert v.decode(v.encode(SAMPLE)) == SAMPLE


def test_affine_rejects_non_integer():
    with pytest.raises(ConfigurationError):
        create_variant("Affine", KEY, affine_a="5")


def test_numeric_rejects_garbage():
    v = create_variant("Numeric", KEY)
    with pytest.raises(MalformedInputError):
        v.decode("72-abc")
    with pytest.raises(MalformedInputError):
        v.decode("72--105")
    with pytest.raises(MalformedInputError):
        v.decode("99999999")
    assert v.decode("") == ""
    assert v.encode("") == ""


@pytest.mark.parametrize("name", ["xor", "vigenere", "Base64"])
def test_base64_decoders_reject_garbage(name):
    v = create_variant(name, KEY)
    with pytest.raises(MalformedInputError):
        v.decode("not base64!")


def test_base64_decoder_rejects_invalid_utf8():
    v = create_variant("Base64", KEY)
    with pytest.raises(MalformedInputError):
        v.decode("/w==")

import pytest

from tughra.errors import ConfigurationError
from tughra.key import KeyMaterial


def test_offsets_collapse_duplicates_in_order():
    key = KeyMaterial("abracadabra")
    assert key.offsets == "abrcd"
    assert key.text == "abracadabra"


def test_byte_length_counts_utf8():
    assert KeyMaterial("ü").byte_length == 2
    assert KeyMaterial("password").byte_length == 8


def test_strength():
    KeyMaterial("12345678").check_strength()
    with pytest.raises(ConfigurationError):
        KeyMaterial("1234567").check_strength()


def test_empty_offsets():
    KeyMaterial("a").check_offsets()
    with pytest.raises(ConfigurationError):
        KeyMaterial("").check_offsets()
    assert not KeyMaterial(None)


def test_immutable():
    key = KeyMaterial("secret-key")
    with pytest.raises(AttributeError):
        key.text = "other"


def test_repr_hides_key():
    assert "secret" not in repr(KeyMaterial("secret-key"))


def test_strength_counts_utf16_units():
    key = KeyMaterial("\U0001F600" * 4)
    assert len(key) == 4
    assert key.utf16_length == 8
    key.check_strength()
    with pytest.raises(ConfigurationError):
        KeyMaterial("\U0001F600" * 3 + "a").check_strength()

import pytest

from tughra.ecc import ECC_MAGIC_BYTE, ErrorCorrection, check_symbols
from tughra.errors import ConfigurationError, MalformedInputError


def test_encode_layout():
    data = b"attack at dawn"
    protected = ErrorCorrection.encode(data, 10)
    assert protected[:2] == bytes([ECC_MAGIC_BYTE, 10])
    assert len(protected) == 2 + len(data) + 10


def test_zero_symbols_is_passthrough():
    assert ErrorCorrection.encode(b"abc", 0) == b"abc"


def test_decode_repairs_errors():
    data = b"attack at dawn"
    protected = bytearray(ErrorCorrection.encode(data, 10))
    protected[4] ^= 0xFF
    protected[9] ^= 0x01
    decoded, had_ecc, corrected = ErrorCorrection.decode(bytes(protected))
    assert decoded == data
    assert had_ecc
    assert corrected == 2


def test_decode_without_header_returns_input():
    assert ErrorCorrection.decode(b"plain") == (b"plain", False, 0)
    assert ErrorCorrection.decode(b"") == (b"", False, 0)


@pytest.mark.parametrize("value", [-1, 255, 1.5, "3", True])
def test_check_symbols_rejects(value):
    with pytest.raises(ConfigurationError):
        check_symbols(value)


def test_check_symbols_accepts():
    check_symbols(0)
    check_symbols(254)


@pytest.mark.parametrize("header", [
    bytes([ECC_MAGIC_BYTE, 255]),
    bytes([ECC_MAGIC_BYTE, 200]),
    bytes([ECC_MAGIC_BYTE, 3]),
])
def test_decode_rejects_impossible_symbol_count(header):
    with pytest.raises(MalformedInputError):
        ErrorCorrection.decode(header + b"abc")

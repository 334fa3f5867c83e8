"""
Reed-Solomon error correction for base-wrapped payloads.

Adds ECC bytes to data for corruption recovery. Uses a magic byte prefix
(0xEC) so decode only repairs payloads that were protected on encode.
"""
from typing import Tuple

from reedsolo import RSCodec, ReedSolomonError

from .errors import ConfigurationError, MalformedInputError
from .log import log_info, log_warn

# ECC Magic byte for auto-detection of error-corrected payloads
ECC_MAGIC_BYTE = 0xEC
MAX_ECC_SYMBOLS = 254


def check_symbols(ecc_symbols: int):
    if isinstance(ecc_symbols, bool) or not isinstance(ecc_symbols, int):
        raise ConfigurationError(f"ECC symbols must be an integer, got {ecc_symbols!r}")
    if not 0 <= ecc_symbols <= MAX_ECC_SYMBOLS:
        raise ConfigurationError(
            f"ECC symbols must be between 0 and {MAX_ECC_SYMBOLS}, got {ecc_symbols}")


class ErrorCorrection:

    @staticmethod
    def encode(data: bytes, ecc_symbols: int) -> bytes:
        """
        Add Reed-Solomon ECC to data.
        Returns: [MAGIC_BYTE] + [ECC_SYMBOLS_COUNT] + [RS_ENCODED_DATA]
        """
        if ecc_symbols <= 0:
            return data
        rsc = RSCodec(ecc_symbols)
        encoded = rsc.encode(data)
        return bytes([ECC_MAGIC_BYTE, ecc_symbols]) + bytes(encoded)

    @staticmethod
    def decode(data: bytes) -> Tuple[bytes, bool, int]:
        """
        Decode and repair Reed-Solomon protected data.

        Returns:
            (decoded_data, had_ecc, errors_corrected)

        Raises MalformedInputError when the payload carries the ECC header
        but is damaged beyond repair.
        """
        if len(data) < 2 or data[0] != ECC_MAGIC_BYTE:
            log_warn("No ECC header found. Returning payload as-is.")
            return data, False, 0

        ecc_symbols = data[1]
        body = data[2:]
        if ecc_symbols == 0:
            return body, True, 0
        if ecc_symbols > MAX_ECC_SYMBOLS:
            raise MalformedInputError(
                f"ECC header claims {ecc_symbols} symbols, more than {MAX_ECC_SYMBOLS}.")
        if ecc_symbols >= len(body):
            raise MalformedInputError(
                f"ECC header claims {ecc_symbols} symbols but only {len(body)} byte(s) follow.")

        try:
            rsc = RSCodec(ecc_symbols)
            decoded, _, errata_pos = rsc.decode(body)
        except (ReedSolomonError, ValueError) as e:
            raise MalformedInputError(
                f"ECC decode failed: {e}. Data may be corrupted beyond repair.") from None

        errors_corrected = len(errata_pos) if errata_pos else 0
        if errors_corrected:
            log_info(f"Corrected {errors_corrected} error(s) using Reed-Solomon.")
        return bytes(decoded), True, errors_corrected

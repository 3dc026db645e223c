"""
Commitments
===========

Hash commitments binding a private numeric value (a salary figure or a
skill score) to a public digest.

    digest = SHA-256(value || blinding_factor)

`value` is encoded big-endian over the circuit's value width and the
blinding factor is 32 bytes drawn from `secrets`. All functions are pure.

Version: 0.1.0
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass

from zkjobs.errors import InvalidRange, ValidationError


DEFAULT_VALUE_BITS = 32
BLINDING_FACTOR_BYTES = 32
DIGEST_HEX_LENGTH = 64


@dataclass(frozen=True)
class Commitment:
    """A commitment digest together with its opening randomness."""

    digest: str
    blinding_factor: bytes

    @property
    def blinding_factor_hex(self) -> str:
        return "0x" + self.blinding_factor.hex()


def check_range(value: int, value_bits: int = DEFAULT_VALUE_BITS) -> int:
    """
    Check that `value` is an unsigned integer representable in `value_bits`.

    Raises:
        InvalidRange: If the value is not an int or falls outside the domain
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRange(f"Value must be an integer, got {type(value).__name__}")
    max_value = (1 << value_bits) - 1
    if value < 0 or value > max_value:
        raise InvalidRange(
            f"Value {value} outside [0, {max_value}]",
            value_bits=value_bits,
        )
    return value


def normalize_digest(digest: str) -> str:
    """
    Normalize a 32-byte hex digest to lowercase `0x`-prefixed form.

    Raises:
        ValidationError: If `digest` is not 64 hex characters
    """
    if not isinstance(digest, str):
        raise ValidationError("Digest must be a hex string")
    body = digest[2:] if digest[:2].lower() == "0x" else digest
    if len(body) != DIGEST_HEX_LENGTH:
        raise ValidationError(f"Digest must be {DIGEST_HEX_LENGTH} hex characters")
    try:
        bytes.fromhex(body)
    except ValueError as e:
        raise ValidationError("Digest is not valid hex") from e
    return "0x" + body.lower()


def coerce_blinding_factor(blinding_factor: bytes | str) -> bytes:
    """
    Accept a blinding factor as raw bytes or a hex string.

    Raises:
        ValidationError: If it is not exactly 32 bytes
    """
    if isinstance(blinding_factor, str):
        body = blinding_factor[2:] if blinding_factor[:2].lower() == "0x" else blinding_factor
        try:
            blinding_factor = bytes.fromhex(body)
        except ValueError as e:
            raise ValidationError("Blinding factor is not valid hex") from e
    if not isinstance(blinding_factor, bytes | bytearray):
        raise ValidationError("Blinding factor must be bytes or a hex string")
    if len(blinding_factor) != BLINDING_FACTOR_BYTES:
        raise ValidationError(
            f"Blinding factor must be {BLINDING_FACTOR_BYTES} bytes, got {len(blinding_factor)}"
        )
    return bytes(blinding_factor)


def generate_blinding_factor() -> bytes:
    """Draw a fresh blinding factor from the OS CSPRNG."""
    return secrets.token_bytes(BLINDING_FACTOR_BYTES)


def encode_value(value: int, value_bits: int = DEFAULT_VALUE_BITS) -> bytes:
    return check_range(value, value_bits).to_bytes(value_bits // 8, "big")


def commit(
    value: int,
    blinding_factor: bytes | str,
    value_bits: int = DEFAULT_VALUE_BITS,
) -> str:
    """
    Commit to `value` under `blinding_factor`.

    Args:
        value: Private value in [0, 2**value_bits - 1]
        blinding_factor: 32 bytes of randomness (bytes or hex)
        value_bits: Width of the numeric domain

    Returns:
        Digest as `0x` followed by 64 lowercase hex characters

    Raises:
        InvalidRange: If `value` is outside the domain
        ValidationError: If the blinding factor is malformed
    """
    encoded = encode_value(value, value_bits)
    randomness = coerce_blinding_factor(blinding_factor)
    return "0x" + hashlib.sha256(encoded + randomness).hexdigest()


def verify_commitment(
    digest: str,
    value: int,
    blinding_factor: bytes | str,
    value_bits: int = DEFAULT_VALUE_BITS,
) -> bool:
    """
    Check that (`value`, `blinding_factor`) opens `digest`.

    Returns False rather than raising when any argument is malformed.
    """
    try:
        expected = normalize_digest(digest)
        actual = commit(value, blinding_factor, value_bits)
    except ValidationError:
        return False
    return hmac.compare_digest(expected, actual)


def create_commitment(value: int, value_bits: int = DEFAULT_VALUE_BITS) -> Commitment:
    """Commit to `value` with a fresh blinding factor."""
    blinding_factor = generate_blinding_factor()
    return Commitment(
        digest=commit(value, blinding_factor, value_bits),
        blinding_factor=blinding_factor,
    )

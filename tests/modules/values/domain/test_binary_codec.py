"""
Tests para el codec Base64 + CRC32 (lógica pura).
"""

import base64
import zlib

import pytest

from odml_value.modules.values.domain.binary_codec import decode_text, encode_bytes
from odml_value.modules.values.domain.exceptions import BinaryWriteError


def test_encode_then_decode_reproduces_bytes():
    # Arrange
    raw = bytes(range(256)) * 4

    # Act
    text, _ = encode_bytes(raw)

    # Assert
    assert decode_text(text) == raw


def test_checksum_is_computed_over_encoded_bytes():
    """
    Regla: el CRC32 verifica la codificación, no el archivo original.
    """
    raw = b"\x00\x01\x02odml"
    text, checksum = encode_bytes(raw)

    assert text == base64.b64encode(raw).decode("ascii")
    assert checksum.value == str(zlib.crc32(text.encode("ascii")) & 0xFFFFFFFF)
    assert checksum.value != str(zlib.crc32(raw) & 0xFFFFFFFF)
    assert checksum.verify(text.encode("ascii"))


def test_checksum_is_reproducible():
    assert encode_bytes(b"same input")[1] == encode_bytes(b"same input")[1]


def test_empty_bytes_encode_to_empty_text():
    text, checksum = encode_bytes(b"")

    assert text == ""
    assert str(checksum) == "CRC32$0"


def test_decode_rejects_invalid_padding():
    with pytest.raises(BinaryWriteError):
        decode_text("abc")

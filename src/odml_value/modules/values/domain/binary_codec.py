# src/odml_value/modules/values/domain/binary_codec.py
"""
Codec de contenido binario (lógica pura, sin I/O).

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Transformar bytes <-> texto Base64 y calcular el checksum.

Nota: el CRC32 se calcula sobre los bytes *codificados*, no sobre los originales.
Verifica la integridad de la codificación, no la del archivo fuente.
"""

from __future__ import annotations

import base64
import binascii

from .exceptions import BinaryWriteError
from .value_objects import Checksum

ENCODER_NAME = "Base64"


def encode_bytes(raw: bytes) -> tuple[str, Checksum]:
    """Codifica en Base64 estándar y retorna (texto, checksum del texto)."""
    encoded = base64.b64encode(raw)
    return encoded.decode("ascii"), Checksum.crc32(encoded)


def decode_text(encoded: str) -> bytes:
    """
    Inverso exacto de `encode_bytes`.

    Raises:
        BinaryWriteError: Si el texto no es Base64 válido.
    """
    try:
        return base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise BinaryWriteError(f"Contenido Base64 inválido: {e}") from e

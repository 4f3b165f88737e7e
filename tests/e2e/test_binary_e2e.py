# tests/e2e/test_binary_e2e.py
"""
Tests End-to-End (E2E) para valores binarios.
Objetivo: Validar el ciclo completo archivo -> valor codificado -> archivo restaurado
con el sistema de archivos real.
"""

from odml_value.modules.values.application.use_cases import (
    BuildTypedValue,
    EncodeBinaryContent,
    WriteBinaryContent,
)
from odml_value.modules.values.domain.value_objects import (
    Checksum,
    EncodingFailure,
    ValueType,
)
from odml_value.modules.values.infrastructure.adapters import LocalBinaryStorage

# === Escenarios E2E ===


def test_binary_value_roundtrip_through_disk(tmp_path, binary_file_factory):
    """
    Escenario: Construir un valor binario desde un URI 'file:' y restaurarlo.
    Validación: Los bytes restaurados son idénticos y el checksum verifica.
    """
    # Arrange
    source, payload = binary_file_factory("electrode_map.dat", 256 * 1024)
    storage = LocalBinaryStorage()
    builder = BuildTypedValue(EncodeBinaryContent(storage))

    # Act
    value = builder.execute(source.as_uri(), "Binary", definition="raw electrode map")
    restored = tmp_path / "restored.dat"
    WriteBinaryContent(storage).execute(value.content, restored)

    # Assert
    assert value.value_type is ValueType.BINARY
    assert value.filename == "electrode_map.dat"
    assert value.definition == "raw electrode map"
    assert Checksum.parse(value.checksum).verify(value.content.encode("ascii"))
    assert restored.read_bytes() == payload


def test_same_file_encodes_identically(binary_file_factory):
    """
    Escenario: Dos valores independientes referencian el mismo archivo.
    Validación: Cada uno lee y codifica por su cuenta con el mismo resultado.
    """
    source, _ = binary_file_factory("shared.bin", 4096)
    builder = BuildTypedValue(EncodeBinaryContent(LocalBinaryStorage()))

    first = builder.execute(source, "binary")
    second = builder.execute(source.as_uri(), "binary")

    assert first.content == second.content
    assert first.checksum == second.checksum


def test_oversized_file_degrades_to_empty_value(binary_file_factory):
    """
    Escenario: Archivo mayor al límite configurado.
    Validación: No se aborta la construcción; el valor queda vacío con diagnóstico.
    """
    source, _ = binary_file_factory("too_big.bin", 2048)
    builder = BuildTypedValue(EncodeBinaryContent(LocalBinaryStorage(max_bytes=1024)))

    value = builder.execute(source, "binary")

    assert value.is_empty()
    assert value.encoding_failure is not None
    assert "excede" in value.encoding_failure.reason


def test_null_byte_uri_degrades_to_empty_value():
    """
    Escenario: URI 'file:' con un byte nulo codificado (%00).
    Validación: La construcción no aborta; el fallo queda registrado en el valor.
    """
    builder = BuildTypedValue(EncodeBinaryContent(LocalBinaryStorage()))

    value = builder.execute("file:///tmp/a%00b", "binary")

    assert value.is_empty()
    assert isinstance(value.encoding_failure, EncodingFailure)
    assert value.checksum == ""

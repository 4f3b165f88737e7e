"""
Tests unitarios para la Entidad TypedValue.
Foco: Invariantes de construcción, representación y reconciliación con terminologías.
"""

import logging
from datetime import date

import pytest

from odml_value.modules.values.domain.entities import TypedValue
from odml_value.modules.values.domain.exceptions import CoercionError, MissingTypeError
from odml_value.modules.values.domain.value_objects import (
    Checksum,
    EncodedPayload,
    EncodingFailure,
    PreEncodedContent,
    Terminology,
    ValueType,
)

# === Construcción ===


@pytest.mark.parametrize("type_tag", [None, ""])
def test_missing_type_always_fails(type_tag):
    """
    Regla: Sin tipo declarado no existe valor, sin importar el contenido.
    """
    with pytest.raises(MissingTypeError):
        TypedValue.create("42", type_tag)


def test_incompatible_content_aborts_construction():
    with pytest.raises(CoercionError):
        TypedValue.create("abc", "int")


def test_optional_fields_default_to_empty_strings():
    # Act
    value = TypedValue.create("42", "int")

    # Assert
    assert value.content == 42
    assert value.value_type is ValueType.INT
    for field_name in (
        "unit",
        "uncertainty",
        "filename",
        "definition",
        "reference",
        "encoder",
        "checksum",
    ):
        assert getattr(value, field_name) == ""
    assert value.associated_property is None


def test_empty_content_is_accepted_and_reported(caplog):
    # Act
    with caplog.at_level(logging.WARNING):
        value = TypedValue.create(None, "float", unit="mV")

    # Assert
    assert value.is_empty()
    assert value.unit == "mV"
    assert "terminologías" in caplog.text


def test_unknown_type_is_kept_as_string():
    value = TypedValue.create("payload", "matrix")

    assert value.value_type is ValueType.STRING
    assert value.declared_type == "matrix"
    assert value.recognized_type is False


def test_from_sequence_uses_positional_order():
    # Act
    value = TypedValue.from_sequence(
        ["2021-05-01", "", "1 day", "date", "f.txt", "recording date", "lab book"]
    )

    # Assert
    assert value.content == date(2021, 5, 1)
    assert value.uncertainty == "1 day"
    assert value.filename == "f.txt"
    assert value.definition == "recording date"
    assert value.reference == "lab book"


def test_from_sequence_rejects_too_many_items():
    with pytest.raises(ValueError):
        TypedValue.from_sequence(["1", "", "", "int", "", "", "", "extra"])


# === Representación ===


def test_render_includes_uncertainty_and_unit():
    value = TypedValue.create("12.5", "float", unit="mV", uncertainty=0.1)

    assert value.render() == "12.5+-0.1 mV"
    assert str(value) == "12.5+-0.1 mV"


def test_render_without_optional_parts():
    assert TypedValue.create("2021-05-01", "date").render() == "2021-05-01"


def test_content_equals_compares_literals_only():
    a = TypedValue.create("3", "int", unit="s")
    b = TypedValue.create(3.7, "int", unit="ms")
    c = TypedValue.create("4", "int")

    assert a.content_equals(b)
    assert not a.content_equals(c)


# === Codificación ===


def test_apply_encoding_stamps_provenance():
    # Arrange
    value = TypedValue.create("file:///tmp/data.bin", "binary")
    checksum = Checksum.crc32(b"AAEC")

    # Act
    value.apply_encoding(EncodedPayload("AAEC", checksum, "data.bin"))

    # Assert
    assert value.content == "AAEC"
    assert value.checksum == str(checksum)
    assert value.encoder == "Base64"
    assert value.filename == "data.bin"
    assert value.encoding_failure is None


def test_apply_encoding_failure_leaves_empty_content():
    value = TypedValue.create("file:///missing.bin", "binary")
    failure = EncodingFailure("file:///missing.bin", "no existe")

    value.apply_encoding(failure)

    assert value.is_empty()
    assert value.encoding_failure == failure
    assert value.checksum == ""


def test_apply_pre_encoded_keeps_text():
    value = TypedValue.create("aGVsbG8=", "binary")

    value.apply_encoding(PreEncodedContent("aGVsbG8="))

    assert value.content == "aGVsbG8="
    assert value.encoder == ""


def test_apply_encoding_only_for_binary_values():
    value = TypedValue.create("x", "string")

    with pytest.raises(ValueError):
        value.apply_encoding(PreEncodedContent("x"))


# === Árbol ===


def test_back_reference_is_an_identifier():
    value = TypedValue.create("x", "string")

    value.attach_to("section/recording/property:date")
    assert value.associated_property == "section/recording/property:date"

    value.detach()
    assert value.associated_property is None


# === Terminologías ===


def test_reconcile_keeps_own_type_and_unit_on_mismatch(caplog):
    # Arrange
    value = TypedValue.create("5", "int", unit="mV")

    # Act
    with caplog.at_level(logging.WARNING):
        report = value.reconcile_with_terminology(Terminology("float", "V"))

    # Assert
    assert report.type_mismatch and report.unit_mismatch
    assert value.value_type is ValueType.INT
    assert value.unit == "mV"
    assert "terminología" in caplog.text


def test_reconcile_matches_ignoring_case():
    value = TypedValue.create("5", "Integer", unit="MV")

    report = value.reconcile_with_terminology(Terminology("int", "mv"))

    assert not report.type_mismatch
    assert not report.unit_mismatch


def test_reconcile_adopts_missing_unit():
    value = TypedValue.create("5", "int")

    report = value.reconcile_with_terminology(Terminology("int", "Hz"))

    assert report.adopted_unit
    assert value.unit == "Hz"


def test_reconcile_adopts_type_for_unrecognized_values():
    # Arrange
    value = TypedValue.create("2021-05-01", "calendar")

    # Act
    report = value.reconcile_with_terminology(Terminology("date"))

    # Assert
    assert report.adopted_type
    assert value.value_type is ValueType.DATE
    assert value.content == date(2021, 5, 1)
    assert value.recognized_type


def test_reconcile_does_not_adopt_incompatible_type():
    value = TypedValue.create("not a number", "quantity")

    report = value.reconcile_with_terminology(Terminology("int"))

    assert not report.adopted_type
    assert value.value_type is ValueType.STRING
    assert value.content == "not a number"

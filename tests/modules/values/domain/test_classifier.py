"""
Tests para el Clasificador de Tipos de Strings.
Enfoque: Orden de prioridad de la cascada y formas sospechosas.
"""

import logging

import pytest

from odml_value.modules.values.domain.classifier import classify
from odml_value.modules.values.domain.value_objects import TypeGuess


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1;2", TypeGuess.N_TUPLE),
        ("2021-05-01", TypeGuess.DATE),
        ("2021-02-29", TypeGuess.DATE),
        ("12:30:00", TypeGuess.TIME),
        ("24:60:60", TypeGuess.TIME),
        ("2021-05-01 12:30:00", TypeGuess.DATETIME),
        ("42", TypeGuess.INT),
        ("-7", TypeGuess.INT),
        ("3.14", TypeGuess.FLOAT),
        ("+.5", TypeGuess.FLOAT),
        ("true", TypeGuess.BOOLEAN),
        ("false", TypeGuess.BOOLEAN),
        ("several words here", TypeGuess.TEXT),
        ("word", TypeGuess.STRING),
    ],
)
def test_classify_known_shapes(text, expected):
    assert classify(text) is expected


def test_integer_rule_wins_over_boolean():
    """
    Regla: '1' y '0' son enteros porque la regla de enteros va antes que la booleana.
    """
    assert classify("1") is TypeGuess.INT
    assert classify("0") is TypeGuess.INT


def test_out_of_range_date_is_suspicious(caplog):
    # Act
    with caplog.at_level(logging.INFO):
        guess = classify("2021-13-40")

    # Assert
    assert guess is TypeGuess.NEAR_DATE
    assert guess.is_suspicious
    assert "2021-13-40" in caplog.text


def test_february_is_capped_at_29():
    assert classify("2021-02-30") is TypeGuess.NEAR_DATE


def test_out_of_range_time_is_suspicious():
    assert classify("25:61:00") is TypeGuess.NEAR_TIME


def test_datetime_with_suspicious_date_is_still_datetime():
    assert classify("2021-13-40 12:30:00") is TypeGuess.DATETIME


def test_input_is_trimmed():
    assert classify("  42  ") is TypeGuess.INT
    assert classify("\t2021-05-01\n") is TypeGuess.DATE


def test_boolean_literals_are_case_sensitive():
    assert classify("True") is TypeGuess.STRING


def test_float_requires_fractional_part():
    assert classify("3.") is TypeGuess.STRING


def test_multiline_text_is_text():
    assert classify("first line\nsecond line") is TypeGuess.TEXT

# src/odml_value/modules/values/domain/classifier.py
"""
Clasificador de Tipos para Strings sin tipo declarado.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Sugerir (nunca imponer) un tipo a partir del texto.

El orden de evaluación es una cascada de prioridades: la primera regla que
coincide gana. Reordenar cambia resultados en los bordes
(ej: "1" es entero, no booleano, porque la regla de enteros va antes).
"""

from __future__ import annotations

import logging
import re

from .value_objects import TypeGuess

logger = logging.getLogger(__name__)

# === Patrones (todos se evalúan contra el string completo) ===

N_TUPLE = re.compile(r"[0-9]+;[0-9]+", re.IGNORECASE)

# Meses 01-12, días hasta 31, febrero hasta 29 (sin aritmética de bisiestos)
DATE_STRICT = re.compile(
    r"[0-9]{4}-((((0[13-9])|(1[0-2]))-(([0-2][0-9])|(3[01])))|(02-[0-2][0-9]))"
)
DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Horas 00-24, minutos y segundos 00-60 (permisivo en el borde)
TIME_STRICT = re.compile(r"(([01][0-9])|(2[0-4])):(([0-5][0-9])|60):(([0-5][0-9])|60)")
TIME_SHAPE = re.compile(r"[0-9]{2}:[0-9]{2}:[0-9]{2}")

DATETIME_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")

INTEGER = re.compile(r"[+-]?[0-9]+")
FLOAT = re.compile(r"[+-]?[0-9]*\.[0-9]+")
BOOLEAN = re.compile(r"true|false|1|0")
WHITESPACE = re.compile(r"\s")


def _upgrade_to_datetime(text: str, guess: TypeGuess) -> TypeGuess:
    if DATETIME_SHAPE.fullmatch(text):
        logger.debug("classify:\tfound 'datetime'")
        return TypeGuess.DATETIME
    return guess


def classify(text: str) -> TypeGuess:
    """
    Conjetura el tipo más plausible para `text`.

    Función pura: el único efecto lateral es el log de diagnóstico.
    Las formas casi-fecha / casi-hora se reportan como sospechosas
    (NEAR_DATE / NEAR_TIME) en lugar de descartarse en silencio.
    """
    text = text.strip()

    if N_TUPLE.fullmatch(text):
        logger.debug("classify:\tfound 'n-tuple'")
        return TypeGuess.N_TUPLE

    if DATE_SHAPE.fullmatch(text):
        if DATE_STRICT.fullmatch(text):
            guess = TypeGuess.DATE
        else:
            guess = TypeGuess.NEAR_DATE
            logger.info(f"classify:\tfound 'date'-like value: {text}")
        return _upgrade_to_datetime(text, guess)

    if TIME_SHAPE.fullmatch(text):
        if TIME_STRICT.fullmatch(text):
            guess = TypeGuess.TIME
        else:
            guess = TypeGuess.NEAR_TIME
            logger.info(f"classify:\tfound 'time'-like value: {text}")
        return _upgrade_to_datetime(text, guess)

    if INTEGER.fullmatch(text):
        return TypeGuess.INT

    if FLOAT.fullmatch(text):
        return TypeGuess.FLOAT

    if BOOLEAN.fullmatch(text):
        return TypeGuess.BOOLEAN

    if DATETIME_SHAPE.fullmatch(text):
        logger.debug("classify:\tfound 'datetime'")
        return TypeGuess.DATETIME

    if WHITESPACE.search(text):
        return TypeGuess.TEXT

    return TypeGuess.STRING

# src/odml_value/modules/values/domain/coercion.py
"""
Motor de Coerción de Tipos.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Única puerta de entrada del contenido a un valor tipado.
Valida y normaliza el contenido contra el tipo declarado; no interpreta semántica.

Reglas clave:
- El tipo declarado manda sobre la estructura inferida.
- Contenido vacío no es un error: se registra un warning (placeholders de terminologías).
- Un tipo desconocido se degrada a 'string' de forma explícita y auditable.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import date, datetime, time
from decimal import Decimal
from numbers import Real
from pathlib import PurePath
from typing import Any
from urllib.parse import ParseResult, SplitResult, urlsplit

from .exceptions import CoercionError
from .value_objects import CoercedContent, ValueType

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

N_TUPLE_PATTERN = re.compile(r"[0-9]+;[0-9]+", re.IGNORECASE)
INTEGER_LITERAL_PATTERN = re.compile(r"[+-]?[0-9]+")

# Protocolos aceptados para URLs absolutas
URL_SCHEMES = frozenset({"http", "https", "ftp", "file", "jar", "mailto"})


def is_empty_content(content: Any) -> bool:
    """None o cualquier objeto cuya representación textual sea vacía."""
    return content is None or str(content) == ""


def coerce(content: Any, declared_type: str) -> CoercedContent:
    """
    Convierte `content` a la representación canónica de `declared_type`.

    Returns:
        CoercedContent con el tipo resuelto y el contenido canónico
        (None si el contenido estaba vacío).

    Raises:
        CoercionError: Si el contenido no es compatible con el tipo declarado.
    """
    value_type = ValueType.parse(declared_type)
    recognized = value_type is not None

    if not recognized:
        logger.warning(
            f"Tipo desconocido '{declared_type}': se maneja como 'string'"
        )
        value_type = ValueType.STRING

    if is_empty_content(content):
        logger.warning(
            f"Contenido vacío para tipo '{declared_type}' "
            "(solo válido en terminologías)"
        )
        return CoercedContent(value_type, None, recognized)

    if not recognized:
        return CoercedContent(value_type, content, recognized=False)

    converter = _CONVERTERS[value_type]
    return CoercedContent(value_type, converter(content, declared_type))


# === Conversores por tipo ===


def _reject(content: Any, declared_type: str, reason: str) -> CoercionError:
    error = CoercionError(declared_type, content, reason)
    logger.error(str(error))
    return error


def _is_number(content: Any) -> bool:
    # bool hereda de int, pero un booleano no es un número para este dominio
    if isinstance(content, bool):
        return False
    return isinstance(content, (Real, Decimal))


def _to_int(content: Any, declared_type: str) -> int:
    if isinstance(content, str):
        literal = content
        for separator in (".", ","):
            index = literal.find(separator)
            if index != -1:
                literal = literal[:index]
                break
        if not INTEGER_LITERAL_PATTERN.fullmatch(literal):
            raise _reject(content, declared_type, "no es un entero")
        return int(literal)
    if _is_number(content):
        try:
            return int(content)
        except (ValueError, OverflowError):
            raise _reject(content, declared_type, "no es finito") from None
    raise _reject(content, declared_type, "clase no soportada")


def _to_float(content: Any, declared_type: str) -> float:
    if _is_number(content):
        return float(content)
    if isinstance(content, str):
        # Separadores "_" son sintaxis de Python, no literales numéricos
        if "_" in content:
            raise _reject(content, declared_type, "no es un número decimal")
        try:
            return float(content)
        except ValueError:
            raise _reject(content, declared_type, "no es un número decimal") from None
    raise _reject(content, declared_type, "clase no soportada")


def _to_string(content: Any, declared_type: str) -> str:
    if isinstance(content, str):
        return content
    raise _reject(content, declared_type, "se esperaba texto")


def _to_n_tuple(content: Any, declared_type: str) -> str:
    if isinstance(content, str) and N_TUPLE_PATTERN.fullmatch(content):
        return content
    raise _reject(
        content,
        declared_type,
        f"no cumple la definición de n-tuple ({N_TUPLE_PATTERN.pattern})",
    )


def _parse_temporal(content: str, fmt: str, declared_type: str) -> datetime:
    try:
        return datetime.strptime(content.strip(), fmt)
    except ValueError:
        raise _reject(content, declared_type, f"formato esperado {fmt}") from None


def _to_date(content: Any, declared_type: str) -> date:
    if isinstance(content, datetime):
        return content.date()
    if isinstance(content, date):
        return content
    if isinstance(content, str):
        return _parse_temporal(content, DATE_FORMAT, declared_type).date()
    raise _reject(content, declared_type, "clase no soportada para fecha")


def _to_time(content: Any, declared_type: str) -> time:
    if isinstance(content, datetime):
        return content.time().replace(microsecond=0)
    if isinstance(content, time):
        return content.replace(microsecond=0)
    if isinstance(content, str):
        return _parse_temporal(content, TIME_FORMAT, declared_type).time()
    raise _reject(content, declared_type, "clase no soportada para hora")


def _to_datetime(content: Any, declared_type: str) -> datetime:
    if isinstance(content, datetime):
        return content.replace(microsecond=0)
    if isinstance(content, date):
        return datetime.combine(content, time())
    if isinstance(content, str):
        return _parse_temporal(content, DATETIME_FORMAT, declared_type)
    raise _reject(content, declared_type, "clase no soportada para fecha-hora")


def _to_boolean(content: Any, declared_type: str) -> bool:
    if isinstance(content, bool):
        return content
    if isinstance(content, str):
        # Asimetría conocida: cualquier literal distinto de "true" es False
        return content.lower() == "true"
    raise _reject(content, declared_type, "clase no soportada para booleano")


def _to_url(content: Any, declared_type: str) -> SplitResult:
    if isinstance(content, SplitResult):
        return content
    if isinstance(content, ParseResult):
        return urlsplit(content.geturl())
    if isinstance(content, str):
        parsed = urlsplit(content.strip())
        scheme = parsed.scheme.lower()
        if scheme not in URL_SCHEMES:
            raise _reject(content, declared_type, "protocolo desconocido o ausente")
        if not (parsed.netloc or parsed.path):
            raise _reject(content, declared_type, "URL sin destino")
        return parsed
    raise _reject(content, declared_type, "clase no soportada para URL")


def _to_binary_reference(content: Any, declared_type: str) -> Any:
    # La lectura y codificación del archivo ocurre después, fuera del dominio
    if isinstance(content, (str, os.PathLike, SplitResult, ParseResult)):
        return content
    raise _reject(
        content, declared_type, "se esperaba texto Base64, archivo, URL o URI"
    )


def _to_person(content: Any, declared_type: str) -> str:
    if isinstance(content, str):
        return content
    raise _reject(content, declared_type, "una persona debe ser texto")


_CONVERTERS = {
    ValueType.INT: _to_int,
    ValueType.FLOAT: _to_float,
    ValueType.STRING: _to_string,
    ValueType.TEXT: _to_string,
    ValueType.N_TUPLE: _to_n_tuple,
    ValueType.DATE: _to_date,
    ValueType.TIME: _to_time,
    ValueType.DATETIME: _to_datetime,
    ValueType.BOOLEAN: _to_boolean,
    ValueType.URL: _to_url,
    ValueType.BINARY: _to_binary_reference,
    ValueType.PERSON: _to_person,
}


# === Utilidades de representación ===


def to_text(value_type: ValueType, content: Any) -> str:
    """
    Representa el contenido canónico como literal (inverso de `coerce`).
    El año se rellena a 4 dígitos: strftime("%Y") no lo hace en todas las plataformas.
    """
    if content is None:
        return ""
    if value_type is ValueType.DATETIME and isinstance(content, datetime):
        return f"{content.year:04d}-" + content.strftime("%m-%d %H:%M:%S")
    if value_type is ValueType.DATE and isinstance(content, date):
        return f"{content.year:04d}-" + content.strftime("%m-%d")
    if value_type is ValueType.TIME and isinstance(content, time):
        return content.strftime(TIME_FORMAT)
    if isinstance(content, bool):
        return "true" if content else "false"
    if isinstance(content, (SplitResult, ParseResult)):
        return content.geturl()
    return str(content)


def infer_type(obj: Any) -> ValueType:
    """Tipo correspondiente a la clase Python de un objeto ya tipado."""
    if isinstance(obj, str):
        return ValueType.STRING
    if isinstance(obj, bool):
        return ValueType.BOOLEAN
    if isinstance(obj, int):
        return ValueType.INT
    if isinstance(obj, (float, Decimal)):
        return ValueType.FLOAT
    if isinstance(obj, datetime):
        return ValueType.DATETIME
    if isinstance(obj, date):
        return ValueType.DATE
    if isinstance(obj, time):
        return ValueType.TIME
    if isinstance(obj, (SplitResult, ParseResult)):
        return ValueType.URL
    if isinstance(obj, PurePath):
        return ValueType.BINARY
    return ValueType.STRING

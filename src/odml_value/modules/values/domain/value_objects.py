# src/odml_value/modules/values/domain/value_objects.py
"""
Value Objects para el Bounded Context de Valores.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Vocabulario cerrado de tipos, checksums y resultados inmutables
de coerción y codificación.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

# === Guía de Organización ===
# ✅ PUREZA: Solo tipos nativos y lógica de validación pura.
# ❌ SIN I/O: No leer disco aquí. Los bytes se pasan ya leídos.


class ValueType(Enum):
    """
    Vocabulario cerrado de tipos de un valor de metadatos.
    El valor del miembro es la etiqueta canónica usada al serializar.
    """

    STRING = "string"
    TEXT = "text"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    N_TUPLE = "n-tuple"
    URL = "url"
    BINARY = "binary"
    PERSON = "person"

    @classmethod
    def parse(cls, tag: str) -> Optional[ValueType]:
        """
        Traduce una etiqueta libre (sin distinguir mayúsculas) a un miembro.

        Las familias numéricas y booleanas se reconocen por prefijo
        ('integer', 'float64', 'bool' ...). Retorna None si la etiqueta
        no pertenece al vocabulario: el caller decide el fallback.
        """
        normalized = tag.strip().lower()
        if normalized.startswith("int"):
            return cls.INT
        if normalized.startswith("float"):
            return cls.FLOAT
        if normalized.startswith("bool"):
            return cls.BOOLEAN
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @property
    def is_temporal(self) -> bool:
        return self in (ValueType.DATE, ValueType.TIME, ValueType.DATETIME)


class TypeGuess(Enum):
    """
    Resultado del clasificador de strings.
    NEAR_DATE / NEAR_TIME tienen forma de fecha/hora pero valores fuera de rango:
    son sospechosos y no corresponden a ningún tipo real.
    """

    STRING = "string"
    TEXT = "text"
    N_TUPLE = "n-tuple"
    DATE = "date"
    NEAR_DATE = "near-date"
    TIME = "time"
    NEAR_TIME = "near-time"
    DATETIME = "datetime"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @property
    def is_suspicious(self) -> bool:
        return self in (TypeGuess.NEAR_DATE, TypeGuess.NEAR_TIME)

    @property
    def value_type(self) -> Optional[ValueType]:
        """Tipo sugerido para construir el valor (None si la conjetura es sospechosa)."""
        if self.is_suspicious:
            return None
        return ValueType(self.value)


@dataclass(frozen=True)
class Checksum:
    """
    Checksum en formato '<ALGORITMO>$<valor>' (ej: 'CRC32$1234567').
    Solo CRC32 está soportado para calcular; cualquier algoritmo se puede parsear.
    """

    algorithm: str
    value: str

    SEPARATOR = "$"

    def __post_init__(self):
        if not self.algorithm:
            raise ValueError("El algoritmo del checksum no puede estar vacío.")
        if not self.value:
            raise ValueError("El valor del checksum no puede estar vacío.")
        if self.SEPARATOR in self.algorithm:
            raise ValueError(f"Algoritmo inválido: {self.algorithm}")

    @classmethod
    def crc32(cls, data: bytes) -> Checksum:
        """CRC32 sin signo, representado en decimal."""
        return cls(algorithm="CRC32", value=str(zlib.crc32(data) & 0xFFFFFFFF))

    @classmethod
    def parse(cls, text: str) -> Checksum:
        algorithm, sep, value = text.partition(cls.SEPARATOR)
        if not sep:
            raise ValueError(f"Checksum sin separador '{cls.SEPARATOR}': {text}")
        return cls(algorithm=algorithm, value=value)

    def verify(self, data: bytes) -> bool:
        """Recalcula sobre `data` y compara. Algoritmos desconocidos no verifican."""
        if self.algorithm.upper() != "CRC32":
            return False
        return Checksum.crc32(data).value == self.value

    def __str__(self) -> str:
        return f"{self.algorithm}{self.SEPARATOR}{self.value}"


@dataclass(frozen=True)
class CoercedContent:
    """
    Resultado exitoso de la coerción: contenido canónico etiquetado con su tipo.
    `recognized` es False cuando el tipo declarado no existía y se degradó a string.
    """

    value_type: ValueType
    content: Any
    recognized: bool = True


@dataclass(frozen=True)
class Terminology:
    """Definición externa (esquema) que propone tipo y unidad para una propiedad."""

    type_tag: str = ""
    unit: str = ""


# === Resultados de la Codificación Binaria ===


@dataclass(frozen=True)
class EncodedPayload:
    """Archivo leído y codificado con éxito."""

    text: str
    checksum: Checksum
    filename: str
    encoder: str = "Base64"


@dataclass(frozen=True)
class PreEncodedContent:
    """La referencia no era un archivo: se asume contenido ya codificado en línea."""

    text: str


@dataclass(frozen=True)
class EncodingFailure:
    """
    Fallo absorbido de codificación. Nunca se propaga como excepción:
    el valor queda vacío y conserva este registro para diagnóstico.
    """

    reference: str
    reason: str


EncodingOutcome = Union[EncodedPayload, PreEncodedContent, EncodingFailure]

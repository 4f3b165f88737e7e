# src/odml_value/modules/values/domain/entities.py
"""
Entidades del dominio de Valores.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Representar un valor de metadatos tipado (hoja del árbol) y
proteger sus invariantes durante el ciclo de vida.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from odml_value.core.value_objects import NonEmptyText

# === Imports del Mismo Módulo ===
from .binary_codec import ENCODER_NAME
from .coercion import coerce, to_text
from .exceptions import CoercionError, MissingTypeError
from .value_objects import (
    EncodedPayload,
    EncodingFailure,
    EncodingOutcome,
    PreEncodedContent,
    Terminology,
    ValueType,
)

# === Guía de Organización ===
# ✅ UNA SOLA PUERTA: el contenido solo entra a través de `coerce`.
# ✅ SIN None: los campos descriptivos opcionales son "" cuando no se definen.
# ❌ SIN I/O: la lectura de archivos binarios vive en Application/Infrastructure.

logger = logging.getLogger(__name__)

SEQUENCE_FIELDS = (
    "content",
    "unit",
    "uncertainty",
    "type",
    "filename",
    "definition",
    "reference",
)


@dataclass(frozen=True)
class Reconciliation:
    """Resumen de la comparación de un valor con su terminología."""

    type_mismatch: bool = False
    unit_mismatch: bool = False
    adopted_type: bool = False
    adopted_unit: bool = False


@dataclass
class TypedValue:
    """
    Valor de metadatos: contenido canónico + atributos descriptivos opcionales.

    El tipo del contenido queda fijo al crearse. Los campos descriptivos
    (unit, uncertainty, filename, definition, reference, checksum, encoder)
    pueden ser actualizados luego por el contenedor dueño.
    """

    value_type: ValueType
    declared_type: str
    _content: Any = None
    recognized_type: bool = True

    unit: str = ""
    uncertainty: Any = ""
    filename: str = ""
    definition: str = ""
    reference: str = ""
    encoder: str = ""
    checksum: str = ""

    # Referencia débil al nodo dueño (identificador, nunca el objeto)
    associated_property: Optional[str] = None
    encoding_failure: Optional[EncodingFailure] = field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        content: Any,
        type_tag: Optional[str],
        unit: Optional[str] = None,
        uncertainty: Any = None,
        filename: Optional[str] = None,
        definition: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> TypedValue:
        """
        Factory method: valida el tipo y pasa el contenido por la coerción.

        Para 'binary' el contenido queda como referencia cruda; la codificación
        la aplica el caso de uso BuildTypedValue mediante `apply_encoding`.

        Raises:
            MissingTypeError: Si `type_tag` es None o vacío.
            CoercionError: Si el contenido no es compatible con el tipo.
        """
        try:
            tag = NonEmptyText(type_tag, field_name="type")
        except ValueError as e:
            raise MissingTypeError(
                "No se pudo crear el valor: 'type' no puede ser nulo ni vacío"
            ) from e

        coerced = coerce(content, tag.value)
        if coerced.content is None:
            logger.warning("El valor no debería estar vacío salvo en terminologías")

        return cls(
            value_type=coerced.value_type,
            declared_type=tag.value,
            _content=coerced.content,
            recognized_type=coerced.recognized,
            unit=unit or "",
            uncertainty="" if uncertainty is None else uncertainty,
            filename=filename or "",
            definition=definition or "",
            reference=reference or "",
        )

    @classmethod
    def from_sequence(cls, data: Sequence[Any]) -> TypedValue:
        """
        Construye desde una secuencia posicional:
        (content, unit, uncertainty, type, filename, definition, reference).
        Las posiciones faltantes se consideran None.
        """
        if len(data) > len(SEQUENCE_FIELDS):
            raise ValueError(
                f"Se esperaban como máximo {len(SEQUENCE_FIELDS)} elementos, "
                f"se recibieron {len(data)}"
            )
        padded = list(data) + [None] * (len(SEQUENCE_FIELDS) - len(data))
        content, unit, uncertainty, type_tag, filename, definition, reference = padded
        return cls.create(
            content,
            type_tag,
            unit=unit,
            uncertainty=uncertainty,
            filename=filename,
            definition=definition,
            reference=reference,
        )

    # === Contenido ===

    @property
    def content(self) -> Any:
        return self._content

    @property
    def content_text(self) -> str:
        """Contenido como literal (ej: fecha -> 'YYYY-MM-DD')."""
        return to_text(self.value_type, self._content)

    def is_empty(self) -> bool:
        return self._content is None or (
            isinstance(self._content, str) and not self._content
        )

    def content_equals(self, other: TypedValue) -> bool:
        """Compara solo el contenido (no tipo, unidad, definición...)."""
        return self.content_text == other.content_text

    def render(self) -> str:
        """Formato de presentación: 'contenido+-incertidumbre unidad'."""
        text = self.content_text
        if self.uncertainty is not None and str(self.uncertainty):
            text += f"+-{self.uncertainty}"
        if self.unit:
            text += f" {self.unit}"
        return text

    def __str__(self) -> str:
        return self.render()

    # === Codificación binaria ===

    def apply_encoding(self, outcome: EncodingOutcome) -> None:
        """
        Sella el resultado de la codificación sobre el valor.
        Solo aplica a valores 'binary'; un fallo deja el contenido vacío.
        """
        if self.value_type is not ValueType.BINARY:
            raise ValueError(
                f"Solo se puede codificar un valor 'binary', no '{self.value_type.value}'"
            )

        if isinstance(outcome, EncodedPayload):
            self._content = outcome.text
            self.checksum = str(outcome.checksum)
            self.encoder = outcome.encoder or ENCODER_NAME
            self.filename = outcome.filename
            self.encoding_failure = None
        elif isinstance(outcome, PreEncodedContent):
            self._content = outcome.text
        elif isinstance(outcome, EncodingFailure):
            logger.warning(
                f"Codificación fallida para '{outcome.reference}': {outcome.reason}"
            )
            self._content = ""
            self.encoding_failure = outcome

    # === Árbol (referencia no propietaria) ===

    def attach_to(self, property_id: str) -> None:
        self.associated_property = property_id

    def detach(self) -> None:
        self.associated_property = None

    # === Terminologías ===

    def reconcile_with_terminology(self, terminology: Terminology) -> Reconciliation:
        """
        Compara tipo y unidad con la terminología.

        - Tipo propio reconocido y distinto: warning, se conserva el propio.
        - Tipo propio no reconocido: se intenta adoptar el de la terminología
          (re-coerción del contenido); si no es compatible, warning.
        - Unidad propia distinta: warning, se conserva la propia.
        - Sin unidad propia: se adopta la de la terminología (si tiene).
        """
        type_mismatch = adopted_type = unit_mismatch = adopted_unit = False

        if terminology.type_tag:
            if self.recognized_type:
                if ValueType.parse(terminology.type_tag) is not self.value_type:
                    type_mismatch = True
                    logger.warning(
                        f"El tipo del valor ({self.declared_type}) no coincide con "
                        f"el de la terminología ({terminology.type_tag}). "
                        "Se conserva el tipo provisto."
                    )
            else:
                adopted_type = self._adopt_type(terminology.type_tag)

        if self.unit:
            if terminology.unit and self.unit.lower() != terminology.unit.lower():
                unit_mismatch = True
                logger.warning(
                    f"La unidad del valor ({self.unit}) no coincide con la de la "
                    f"terminología ({terminology.unit}). Se conserva la unidad provista."
                )
        elif terminology.unit:
            self.unit = terminology.unit
            adopted_unit = True
            logger.info(f"Unidad '{terminology.unit}' agregada desde la terminología")

        return Reconciliation(type_mismatch, unit_mismatch, adopted_type, adopted_unit)

    def _adopt_type(self, type_tag: str) -> bool:
        if ValueType.parse(type_tag) is ValueType.BINARY:
            # Adoptar 'binary' exigiría leer archivos: fuera del dominio
            logger.warning("No se adopta el tipo 'binary' desde una terminología")
            return False
        try:
            coerced = coerce(self._content, type_tag)
        except CoercionError:
            logger.warning(
                f"El valor no es compatible con el tipo sugerido por la "
                f"terminología ({type_tag}). No se modificó."
            )
            return False
        if not coerced.recognized:
            return False

        self.value_type = coerced.value_type
        self.declared_type = type_tag
        self._content = coerced.content
        self.recognized_type = True
        logger.info(f"Tipo '{type_tag}' agregado desde la terminología")
        return True

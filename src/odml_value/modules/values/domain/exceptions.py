# src/odml_value/modules/values/domain/exceptions.py
"""
Excepciones del dominio de Valores.

Arquitectura: Domain Layer
Responsabilidad: Definir errores semánticos independientes de la infraestructura.

Taxonomía:
- Errores estructurales (tipo ausente, contenido incompatible) suben al caller.
- Errores de I/O en codificación binaria se absorben en el caso de uso y se
  convierten en un resultado `EncodingFailure` (ver value_objects).
"""

from __future__ import annotations

from typing import Any


class ValueModelError(Exception):
    """Clase base para errores en el módulo de valores."""

    pass


class MissingTypeError(ValueModelError, ValueError):
    """El tipo declarado es None o vacío. Aborta la construcción del valor."""

    pass


class CoercionError(ValueModelError, ValueError):
    """El contenido no es compatible con el tipo declarado."""

    def __init__(self, declared_type: str, content: Any, reason: str):
        self.declared_type = declared_type
        self.content = content
        self.reason = reason
        super().__init__(
            f"No se puede convertir {type(content).__name__} '{content}' "
            f"al tipo '{declared_type}': {reason}"
        )


class ReferenceResolutionError(ValueModelError):
    """La referencia (URI/URL) no puede convertirse en un archivo local."""

    pass


class BinaryReadError(ValueModelError):
    """El archivo binario no existe, es ilegible, excede el límite o quedó incompleto."""

    pass


class BinaryWriteError(ValueModelError):
    """Fallo al decodificar y escribir contenido binario a disco."""

    pass

# src/odml_value/modules/values/application/use_cases.py
"""
Casos de Uso del módulo de Valores.

Arquitectura: Modular Monolith
Capa: Application
Responsabilidad: Coordinar coerción, lectura de archivos y codificación binaria
para construir valores tipados completos.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional
from urllib.parse import ParseResult, SplitResult

# === Imports de Dominio ===
from odml_value.modules.values.domain.binary_codec import (
    ENCODER_NAME,
    decode_text,
    encode_bytes,
)
from odml_value.modules.values.domain.entities import TypedValue
from odml_value.modules.values.domain.exceptions import (
    BinaryReadError,
    BinaryWriteError,
    ReferenceResolutionError,
)
from odml_value.modules.values.domain.ports.binary_storage import BinaryStoragePort
from odml_value.modules.values.domain.value_objects import (
    EncodedPayload,
    EncodingFailure,
    EncodingOutcome,
    PreEncodedContent,
    ValueType,
)

# ✅ Instrumentación (Observabilidad)
from odml_value.modules.values.infrastructure.observability import (
    ObservabilityService,
)

logger = logging.getLogger("odml_value.app")


class EncodeBinaryContent:
    """
    Caso de Uso: Codificar en Base64 el archivo al que apunta una referencia.

    Política de errores: NUNCA lanza. Cualquier fallo (referencia irresoluble,
    archivo ilegible o demasiado grande) se registra y se retorna como
    EncodingFailure para que el valor quede vacío sin abortar su construcción.

    Colaboradores:
    - storage: BinaryStoragePort (Puerto)
    """

    def __init__(self, storage: BinaryStoragePort):
        self._storage = storage

    @ObservabilityService.measure_latency(operation_name="encode_binary")
    def execute(self, reference: Any) -> EncodingOutcome:
        logger.info(f"Codificando contenido: {reference}")

        # 1. Resolver la referencia a un archivo local
        if isinstance(reference, str):
            try:
                path = self._storage.path_from_uri(reference)
            except ReferenceResolutionError:
                # No es un URI de archivo: se asume contenido ya codificado
                return PreEncodedContent(reference)
        elif isinstance(reference, (SplitResult, ParseResult)):
            try:
                path = self._storage.path_from_uri(reference.geturl())
            except ReferenceResolutionError as e:
                return self._fail(reference, f"No se pudo crear un archivo desde la URL: {e}")
        elif isinstance(reference, os.PathLike):
            path = Path(os.fspath(reference))
        else:
            return self._fail(
                reference,
                f"No se puede crear un archivo desde {type(reference).__name__}",
            )

        # 2. Leer + codificar + checksum sobre los bytes codificados
        try:
            raw = self._storage.read_bytes(path)
        except BinaryReadError as e:
            return self._fail(reference, f"Error durante la codificación: {e}")

        text, checksum = encode_bytes(raw)
        logger.info(f"Archivo codificado: {path.name} ({checksum})")
        return EncodedPayload(
            text=text, checksum=checksum, filename=path.name, encoder=ENCODER_NAME
        )

    def _fail(self, reference: Any, reason: str) -> EncodingFailure:
        logger.error(reason)
        return EncodingFailure(reference=str(reference), reason=reason)


class WriteBinaryContent:
    """
    Caso de Uso: Decodificar contenido Base64 y escribirlo a disco.
    A diferencia de la codificación, aquí los errores SÍ se propagan.
    """

    def __init__(self, storage: BinaryStoragePort):
        self._storage = storage

    def execute(self, encoded: str, target: Optional[Path]) -> int:
        """
        Returns:
            Número de bytes escritos.

        Raises:
            BinaryWriteError: Si no se indica destino, el Base64 es inválido
                o la escritura falla.
        """
        if target is None:
            raise BinaryWriteError("Argumento 'target' no especificado")

        data = decode_text(encoded)
        self._storage.write_bytes(Path(target), data)
        return len(data)


class BuildTypedValue:
    """
    Caso de Uso Principal: pipeline completo de construcción de un valor.

    1. Coerción del contenido contra el tipo declarado (dominio).
    2. Si el tipo es 'binary', codificación del archivo referenciado y sellado
       de checksum/encoder/filename.
    """

    def __init__(self, encoder: EncodeBinaryContent):
        self._encoder = encoder

    def execute(
        self,
        content: Any,
        type_tag: Optional[str],
        unit: Optional[str] = None,
        uncertainty: Any = None,
        filename: Optional[str] = None,
        definition: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> TypedValue:
        """
        Raises:
            MissingTypeError: Si el tipo es None o vacío.
            CoercionError: Si el contenido no es compatible con el tipo.
        """
        value = TypedValue.create(
            content,
            type_tag,
            unit=unit,
            uncertainty=uncertainty,
            filename=filename,
            definition=definition,
            reference=reference,
        )

        if value.value_type is ValueType.BINARY and not value.is_empty():
            outcome = self._encoder.execute(value.content)
            value.apply_encoding(outcome)

        return value

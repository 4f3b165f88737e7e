# src/odml_value/modules/values/infrastructure/adapters.py
"""
Adaptadores de Infraestructura para contenido binario.

Arquitectura: Modular Monolith
Capa: Infrastructure (Adapters)
Responsabilidad: Implementar los puertos del dominio usando el sistema de archivos local.
"""

import logging
import os
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

from odml_value.core.value_objects import PositiveValue

# === Imports de Dominio ===
from odml_value.modules.values.domain.exceptions import (
    BinaryReadError,
    BinaryWriteError,
    ReferenceResolutionError,
)
from odml_value.modules.values.domain.ports.binary_storage import BinaryStoragePort
from odml_value.modules.values.infrastructure.observability import measure_time

logger = logging.getLogger(__name__)

DEFAULT_MAX_BINARY_BYTES = 2**31 - 1


def _max_bytes_from_env(raw: str | None) -> int:
    """Límite direccionable (2 GiB - 1 por defecto), sobrescribible por entorno."""
    if raw is None or not raw.strip():
        return DEFAULT_MAX_BINARY_BYTES
    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit <= 0:
        logger.warning(
            f"ODML_MAX_BINARY_BYTES inválido ({raw!r}): "
            f"se usa el valor por defecto {DEFAULT_MAX_BINARY_BYTES}"
        )
        return DEFAULT_MAX_BINARY_BYTES
    return limit


MAX_BINARY_BYTES = _max_bytes_from_env(os.getenv("ODML_MAX_BINARY_BYTES"))


class LocalBinaryStorage(BinaryStoragePort):
    """
    Implementación que interactúa con el sistema de archivos local del OS.
    """

    def __init__(self, max_bytes: int = MAX_BINARY_BYTES):
        self.max_bytes = PositiveValue(max_bytes).value

    def path_from_uri(self, uri: str) -> Path:
        """
        Acepta solo URIs 'file:' absolutos y jerárquicos, sin autoridad,
        query ni fragmento (ej: 'file:///tmp/data.bin').
        """
        if any(ch.isspace() for ch in uri):
            raise ReferenceResolutionError(f"URI con caracteres ilegales: {uri!r}")

        parts = urlsplit(uri)
        if not parts.scheme:
            raise ReferenceResolutionError(f"URI no absoluto: {uri}")
        if parts.scheme.lower() != "file":
            raise ReferenceResolutionError(f"El esquema del URI no es 'file': {uri}")
        if parts.netloc:
            raise ReferenceResolutionError(f"El URI tiene componente de autoridad: {uri}")
        if parts.query or parts.fragment:
            raise ReferenceResolutionError(f"El URI tiene query o fragmento: {uri}")
        if not parts.path.startswith("/"):
            raise ReferenceResolutionError(f"El URI no es jerárquico: {uri}")

        return Path(url2pathname(parts.path))

    @measure_time(metric_name="binary_read_latency")
    def read_bytes(self, path: Path) -> bytes:
        logger.debug(f"Leyendo contenido binario: {path}")

        too_big = f"El archivo excede el máximo permitido ({self.max_bytes} bytes): {path.name}"
        try:
            size = path.stat().st_size
            if size > self.max_bytes:
                raise BinaryReadError(too_big)
            # Lectura acotada: /proc, FIFOs o archivos que crecen reportan un tamaño engañoso
            with open(path, "rb") as f:
                data = f.read(self.max_bytes + 1)
        except (OSError, ValueError) as e:
            # ValueError: ruta con bytes nulos (ej: 'file:///tmp/a%00b')
            logger.error(f"No se pudo leer el archivo {path!r}: {e}")
            raise BinaryReadError(f"No se pudo leer el archivo {path!r}: {e}") from e

        if len(data) > self.max_bytes:
            raise BinaryReadError(too_big)

        # Asegurar que se leyeron todos los bytes
        if len(data) < size:
            raise BinaryReadError(f"No se pudo leer completamente el archivo {path.name}")

        logger.debug(f"Leídos {len(data)} bytes de {path.name}")
        return data

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            with open(path, "wb") as f:
                f.write(data)
                f.flush()
        except (OSError, ValueError) as e:
            logger.error(f"No se pudo escribir el archivo {path!r}: {e}", exc_info=True)
            raise BinaryWriteError(f"No se pudo escribir el archivo {path}: {e}") from e

        logger.info(f"Contenido binario escrito en: {path} ({len(data)} bytes)")


class InMemoryBinaryStorage(BinaryStoragePort):
    """
    Implementación en memoria (Fake) del almacenamiento.
    Útil para tests unitarios de los casos de uso sin tocar disco.
    """

    def __init__(self, files: dict[str, bytes] | None = None, max_bytes: int = MAX_BINARY_BYTES):
        self.files: dict[str, bytes] = dict(files or {})
        self.max_bytes = max_bytes

    def path_from_uri(self, uri: str) -> Path:
        parts = urlsplit(uri)
        if parts.scheme.lower() != "file" or parts.netloc or not parts.path.startswith("/"):
            raise ReferenceResolutionError(f"URI no soportado: {uri}")
        return Path(parts.path)

    def read_bytes(self, path: Path) -> bytes:
        key = path.as_posix()
        if key not in self.files:
            raise BinaryReadError(f"Archivo inexistente: {key}")
        data = self.files[key]
        if len(data) > self.max_bytes:
            raise BinaryReadError(f"El archivo excede el máximo permitido: {path.name}")
        return data

    def write_bytes(self, path: Path, data: bytes) -> None:
        self.files[path.as_posix()] = data

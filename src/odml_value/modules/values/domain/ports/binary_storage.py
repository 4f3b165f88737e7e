# src/odml_value/modules/values/domain/ports/binary_storage.py
"""
Puerto (Interface) para el acceso a archivos binarios requerido por el dominio.

Arquitectura: Modular Monolith
Capa: Domain -> Ports
Responsabilidad: Abstraer la resolución de referencias y la lectura/escritura de bytes.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class BinaryStoragePort(ABC):
    """
    Contrato para leer y escribir contenido binario (Local o Cloud).
    """

    @abstractmethod
    def path_from_uri(self, uri: str) -> Path:
        """
        Convierte un URI 'file:' absoluto en una ruta local.

        Raises:
            ReferenceResolutionError: Si el URI no denota un archivo local.
        """
        pass

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """
        Lee el archivo completo en memoria.

        Raises:
            BinaryReadError: Si no existe, excede el límite o no se lee completo.
        """
        pass

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes) -> None:
        """
        Escribe `data` en `path`, reemplazando el contenido previo.

        Raises:
            BinaryWriteError: Si la escritura falla.
        """
        pass

# tests/e2e/conftest.py
import os

import pytest


@pytest.fixture
def binary_file_factory(tmp_path):
    """
    Factory para crear archivos binarios con contenido aleatorio conocido.
    Retorna (ruta, bytes) para poder verificar el round-trip completo.
    """

    def _create_binary_file(filename: str, size_bytes: int):
        filepath = tmp_path / filename
        payload = os.urandom(size_bytes)
        filepath.write_bytes(payload)
        return filepath, payload

    return _create_binary_file

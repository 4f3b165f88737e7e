# src/odml_value/modules/values/__init__.py
"""
Módulo de Valores Tipados de metadatos.
"""

from __future__ import annotations

# Application
from .application.use_cases import (
    BuildTypedValue,
    EncodeBinaryContent,
    WriteBinaryContent,
)

# Domain
from .domain.classifier import classify
from .domain.coercion import coerce, infer_type, to_text
from .domain.entities import Reconciliation, TypedValue
from .domain.exceptions import (
    BinaryReadError,
    BinaryWriteError,
    CoercionError,
    MissingTypeError,
    ReferenceResolutionError,
    ValueModelError,
)
from .domain.ports.binary_storage import BinaryStoragePort
from .domain.value_objects import (
    Checksum,
    CoercedContent,
    EncodedPayload,
    EncodingFailure,
    PreEncodedContent,
    Terminology,
    TypeGuess,
    ValueType,
)

# Infrastructure
from .infrastructure.adapters import InMemoryBinaryStorage, LocalBinaryStorage

__all__ = [
    "ValueType",
    "TypeGuess",
    "Checksum",
    "CoercedContent",
    "Terminology",
    "EncodedPayload",
    "PreEncodedContent",
    "EncodingFailure",
    "TypedValue",
    "Reconciliation",
    "coerce",
    "to_text",
    "infer_type",
    "classify",
    "BinaryStoragePort",
    "ValueModelError",
    "MissingTypeError",
    "CoercionError",
    "ReferenceResolutionError",
    "BinaryReadError",
    "BinaryWriteError",
    "BuildTypedValue",
    "EncodeBinaryContent",
    "WriteBinaryContent",
    "LocalBinaryStorage",
    "InMemoryBinaryStorage",
]

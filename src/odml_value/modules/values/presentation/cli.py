# src/odml_value/modules/values/presentation/cli.py
"""
Interfaz de Línea de Comandos (CLI) para Valores Tipados.

Arquitectura: Presentation Layer (Interface Adapter)
Responsabilidad:
    1. Parsear argumentos (argv).
    2. Instanciar el Composition Root.
    3. Formatear la salida (JSON/Texto).
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from odml_value.modules.values.application.use_cases import (
    BuildTypedValue,
    EncodeBinaryContent,
    WriteBinaryContent,
)
from odml_value.modules.values.domain.classifier import classify
from odml_value.modules.values.domain.exceptions import ValueModelError
from odml_value.modules.values.domain.value_objects import EncodedPayload, EncodingFailure
from odml_value.modules.values.infrastructure.adapters import LocalBinaryStorage
from odml_value.modules.values.infrastructure.observability import configure_logging


def setup_parser() -> argparse.ArgumentParser:
    """Configura los argumentos aceptados por la herramienta."""
    parser = argparse.ArgumentParser(
        prog="odml-value",
        description="odML Value - Coerción, clasificación y codificación de valores",
        epilog="Ejemplo: odml-value coerce date 2021-05-01 --json",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Salida en formato JSON (útil para tuberías/pipes)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Muestra logs detallados de progreso",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_classify = sub.add_parser("classify", help="Sugiere un tipo para un texto")
    p_classify.add_argument("text", help="Texto a clasificar")

    p_coerce = sub.add_parser("coerce", help="Convierte contenido al tipo declarado")
    p_coerce.add_argument("type", help="Tipo declarado (int, float, date, ...)")
    p_coerce.add_argument("content", help="Contenido crudo")
    p_coerce.add_argument("--unit", default=None, help="Unidad de medida")

    p_encode = sub.add_parser("encode", help="Codifica un archivo en Base64")
    p_encode.add_argument("input_file", type=Path, help="Archivo a codificar")

    p_decode = sub.add_parser("decode", help="Decodifica Base64 y escribe a disco")
    p_decode.add_argument("encoded_file", type=Path, help="Archivo con texto Base64")
    p_decode.add_argument("output_file", type=Path, help="Destino de los bytes")

    return parser


def _emit(data: dict, as_json: bool) -> None:
    if as_json:
        print(json.dumps(data, indent=2, default=str))
    else:
        for key, value in data.items():
            print(f"{key:<10}: {value}")


def run(args: argparse.Namespace) -> int:
    storage = LocalBinaryStorage()

    if args.command == "classify":
        guess = classify(args.text)
        _emit(
            {
                "guess": guess.value,
                "type": guess.value_type.value if guess.value_type else None,
                "suspicious": guess.is_suspicious,
            },
            args.json,
        )
        return 0

    if args.command == "coerce":
        builder = BuildTypedValue(EncodeBinaryContent(storage))
        value = builder.execute(args.content, args.type, unit=args.unit)
        _emit(
            {
                "type": value.value_type.value,
                "content": value.content_text,
                "recognized": value.recognized_type,
                "display": value.render(),
            },
            args.json,
        )
        return 0

    if args.command == "encode":
        if not args.input_file.exists():
            print(f"❌ Error: El archivo '{args.input_file}' no existe.", file=sys.stderr)
            return 1
        outcome = EncodeBinaryContent(storage).execute(args.input_file)
        if isinstance(outcome, EncodingFailure):
            print(f"❌ Error de Codificación: {outcome.reason}", file=sys.stderr)
            return 2
        if not isinstance(outcome, EncodedPayload):
            print(f"❌ Error: '{args.input_file}' no se pudo leer como archivo.", file=sys.stderr)
            return 2
        _emit(
            {
                "filename": outcome.filename,
                "encoder": outcome.encoder,
                "checksum": str(outcome.checksum),
                "content": outcome.text,
            },
            args.json,
        )
        return 0

    # decode
    if not args.encoded_file.exists():
        print(f"❌ Error: El archivo '{args.encoded_file}' no existe.", file=sys.stderr)
        return 1
    encoded = args.encoded_file.read_text(encoding="ascii").strip()
    written = WriteBinaryContent(storage).execute(encoded, args.output_file)
    _emit({"output": str(args.output_file), "bytes": written}, args.json)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(level=logging.DEBUG)

    try:
        return run(args)
    except ValueModelError as e:
        # Capturamos errores de Dominio y los mostramos bonitos
        print(f"❌ Error de Valor: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\n⚠️  Operación cancelada por el usuario.", file=sys.stderr)
        return 130
    except Exception as e:
        # Errores inesperados (Bugs)
        print(f"❌ Error Crítico: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(main())

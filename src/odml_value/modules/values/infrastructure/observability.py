# src/odml_value/modules/values/infrastructure/observability.py
"""
Configuración centralizada de Logging y Métricas.

Principios SRE:
1. Logs estructurados para máquinas (Archivo / JSON).
2. Logs legibles para humanos (Consola).
3. Latencia y saturación (RAM) de operaciones críticas como la codificación binaria.
"""

import functools
import json
import logging
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable

import psutil

# Configuración Global (sobrescribible por entorno)
LOG_FILE = os.getenv("ODML_LOG_FILE", "odml_value.log")

logger = logging.getLogger("odml_value")


def configure_logging(level=logging.INFO, log_file: str | None = None):
    """
    Configura el sistema de logging con doble destino (File + Console).
    """
    log_file = log_file or LOG_FILE

    # Formateador simple para consola
    console_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%H:%M:%S"
    )

    # Formateador detallado para archivo (Forensics)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(logging.DEBUG)  # Siempre capturamos todo en disco

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Limpiar handlers previos para evitar duplicados
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.info(f"🔭 Observabilidad iniciada. Logs persistentes en: {log_file}")


def measure_time(metric_name: str):
    """
    Decorador para medir latencia de funciones críticas.
    Principio: 'Measure what matters' - Performance.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start_time
                logging.getLogger("metrics").info(
                    f"[METRIC] {metric_name} duration={duration:.4f}s"
                )

        return wrapper

    return decorator


class ObservabilityService:

    # Si LOG_FORMAT=PRETTY, los eventos JSON se imprimen indentados
    PRETTY_PRINT = os.getenv("LOG_FORMAT") == "PRETTY"

    @staticmethod
    def get_correlation_id() -> str:
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_ram_usage_mb() -> float:
        try:
            process = psutil.Process(os.getpid())
            return round(process.memory_info().rss / 1024 / 1024, 2)
        except psutil.Error:
            return 0.0

    @staticmethod
    def log_event(
        event_name: str,
        correlation_id: str,
        payload: dict[str, Any],
        level: str = "INFO",
    ):
        """Emite un log estructurado en JSON (Horizontal o Vertical)."""

        log_entry = {
            "timestamp": time.time(),
            "level": level,
            "event": event_name,
            "correlation_id": correlation_id,
            "data": payload,
        }

        if ObservabilityService.PRETTY_PRINT:
            msg = json.dumps(log_entry, indent=4, default=str)
        else:
            msg = json.dumps(log_entry, default=str)

        if level == "ERROR":
            logger.error(msg)
        else:
            logger.info(msg)

    @staticmethod
    def measure_latency(operation_name: str):
        def decorator(func: Callable):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                start_ram = ObservabilityService._get_ram_usage_mb()
                correlation_id = ObservabilityService.get_correlation_id()

                target = "unknown"
                for arg in args:
                    if isinstance(arg, Path):
                        target = arg.name
                        break
                    if isinstance(arg, str):
                        target = arg[:80]
                        break

                ObservabilityService.log_event(
                    event_name=f"{operation_name}.started",
                    correlation_id=correlation_id,
                    payload={"target": target, "start_ram_mb": start_ram},
                )

                try:
                    result = func(*args, **kwargs)

                    end_ram = ObservabilityService._get_ram_usage_mb()
                    ObservabilityService.log_event(
                        event_name=f"{operation_name}.completed",
                        correlation_id=correlation_id,
                        payload={
                            "duration_sec": round(time.time() - start_time, 3),
                            "end_ram_mb": end_ram,
                            "ram_delta_mb": round(end_ram - start_ram, 2),
                            "target": target,
                            "status": "success",
                        },
                    )
                    return result

                except Exception as e:
                    crash_ram = ObservabilityService._get_ram_usage_mb()
                    ObservabilityService.log_event(
                        event_name=f"{operation_name}.failed",
                        correlation_id=correlation_id,
                        payload={
                            "duration_sec": round(time.time() - start_time, 3),
                            "crash_ram_mb": crash_ram,
                            "target": target,
                            "error_type": type(e).__name__,
                            "error_msg": str(e),
                        },
                        level="ERROR",
                    )
                    raise

            return wrapper

        return decorator

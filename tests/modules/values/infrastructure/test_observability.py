"""
Tests para: Observabilidad (ObservabilityService + decoradores)
Tipo: Unitario
Validación:
  1. Estructura de Logs (JSON)
  2. Manejo de Errores (Exceptions)
  3. Métricas SRE (Latency + RAM Saturation)
"""
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from odml_value.modules.values.infrastructure.observability import (
    ObservabilityService,
    configure_logging,
    measure_time,
)

MODULE = "odml_value.modules.values.infrastructure.observability"


class TestObservabilityService:

    # ─── 1. Pruebas de Utilidad Básica ────────────────────────────────────────

    def test_correlation_id_format(self):
        """Debe devolver un string de 8 caracteres."""
        cid = ObservabilityService.get_correlation_id()
        assert isinstance(cid, str)
        assert len(cid) == 8

    @patch(f"{MODULE}.logger")
    def test_log_structure_compliance(self, mock_logger):
        """Verifica que el JSON tiene los campos estándar."""
        ObservabilityService.log_event("test.evt", "123", {"user": "test"})

        args, _ = mock_logger.info.call_args
        log_json = json.loads(args[0])

        for field in ["timestamp", "level", "event", "correlation_id", "data"]:
            assert field in log_json

    # ─── 2. Decorador & Métricas SRE (RAM) ────────────────────────────────────

    @patch(f"{MODULE}.psutil")
    @patch(f"{MODULE}.logger")
    def test_measure_latency_should_log_ram_metrics(self, mock_logger, mock_psutil):
        # Arrange: Simulamos consumo de RAM (100 MB)
        process_mock = MagicMock()
        process_mock.memory_info.return_value.rss = 104857600
        mock_psutil.Process.return_value = process_mock

        @ObservabilityService.measure_latency("sre_op")
        def work():
            return "done"

        # Act
        assert work() == "done"

        # Assert
        log_json = json.loads(mock_logger.info.call_args_list[-1][0][0])
        data = log_json["data"]
        assert log_json["event"] == "sre_op.completed"
        assert data["end_ram_mb"] == 100.0
        assert data["status"] == "success"

    # ─── 3. Manejo de Errores ─────────────────────────────────────────────────

    @patch(f"{MODULE}.psutil")
    @patch(f"{MODULE}.logger")
    def test_measure_latency_should_reraise_and_log_crash_ram(self, mock_logger, mock_psutil):
        process_mock = MagicMock()
        process_mock.memory_info.return_value.rss = 52428800  # 50 MB
        mock_psutil.Process.return_value = process_mock

        @ObservabilityService.measure_latency("fail_op")
        def broken():
            raise ValueError("Critical Failure")

        with pytest.raises(ValueError):
            broken()

        mock_logger.error.assert_called_once()
        log_json = json.loads(mock_logger.error.call_args[0][0])
        assert log_json["event"] == "fail_op.failed"
        assert log_json["data"]["error_msg"] == "Critical Failure"
        assert log_json["data"]["crash_ram_mb"] == 50.0

    # ─── 4. Contexto (Archivos) ───────────────────────────────────────────────

    @patch(f"{MODULE}.logger")
    def test_context_extraction(self, mock_logger):
        """Si se pasa un Path, debe salir en los logs."""

        @ObservabilityService.measure_latency("file_op")
        def read_file(f):
            pass

        read_file(Path("recording.bin"))

        log_json = json.loads(mock_logger.info.call_args_list[-1][0][0])
        assert log_json["data"]["target"] == "recording.bin"


def test_measure_time_logs_metric(caplog):
    @measure_time("unit_metric")
    def compute():
        return 42

    with caplog.at_level(logging.INFO, logger="metrics"):
        assert compute() == 42

    assert "[METRIC] unit_metric" in caplog.text


def test_configure_logging_writes_to_file(tmp_path):
    # Arrange
    log_file = tmp_path / "run.log"
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level

    try:
        # Act
        configure_logging(level=logging.WARNING, log_file=str(log_file))
        logging.getLogger("odml_value.test").debug("detalle forense")
        for handler in root.handlers:
            handler.flush()

        # Assert
        assert "detalle forense" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)

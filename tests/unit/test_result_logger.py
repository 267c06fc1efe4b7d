"""
Тесты для ResultLogger — тегированного логирования отказов

Проверяет:
1. Теги по ResultCode и уровни logging (INFO для SUCCESS, ERROR для остальных)
2. attach/detach клиентов
3. Перенаправление в файл (set_log_file)
4. Отказы core-операций попадают в лог, не меняя возвращаемых кодов
"""

import logging

import pytest

from src.core.domain import PointSet, ResultCode, Vector, Norm
from src.core.geometry import Region
from src.core.result_logger import DEFAULT_LOGGER_NAME, ResultLogger, format_message, report


@pytest.fixture
def result_logger():
    return ResultLogger(logging.getLogger("tests.result_logger"))


class TestFormatMessage:
    def test_success_tag(self):
        assert format_message("done", ResultCode.SUCCESS) == "INFO: done"

    def test_error_tags(self):
        assert format_message("x", ResultCode.WRONG_DIM) == "ERROR (wrong dimension): x"
        assert format_message("x", ResultCode.BAD_REFERENCE) == "ERROR (bad reference): x"
        assert format_message("x", ResultCode.WRONG_ARGUMENT) == "ERROR (wrong argument): x"

    def test_every_code_has_tag(self):
        for code in ResultCode:
            assert format_message("m", code).endswith("m")


class TestResultLogger:
    def test_default_name(self):
        assert ResultLogger().name == DEFAULT_LOGGER_NAME

    def test_levels(self, result_logger, caplog):
        caplog.set_level(logging.INFO, logger="tests.result_logger")

        result_logger.log("ok", ResultCode.SUCCESS)
        result_logger.log("bad", ResultCode.NOT_FOUND)

        assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR]
        assert caplog.records[1].getMessage() == "ERROR (not found): bad"

    def test_attach_detach(self, result_logger):
        client = object()

        assert result_logger.attach(client) is True
        assert result_logger.attach(client) is False
        assert result_logger.clients == (client,)
        assert result_logger.detach(client) is True
        assert result_logger.detach(client) is False
        assert result_logger.clients == ()

    def test_log_without_clients(self, result_logger, caplog):
        caplog.set_level(logging.INFO, logger="tests.result_logger")
        result_logger.log("nobody attached", ResultCode.SUCCESS)

        assert "nobody attached" in caplog.text

    def test_set_log_file(self, result_logger, tmp_path):
        path = tmp_path / "boxgrid.log"

        assert result_logger.set_log_file(str(path)) == ResultCode.SUCCESS
        result_logger.log("to file", ResultCode.WRONG_DIM)
        assert result_logger.set_log_file(None) == ResultCode.SUCCESS

        assert path.read_text(encoding="utf-8").strip() == "ERROR (wrong dimension): to file"

    def test_set_log_file_bad_path(self, result_logger, tmp_path):
        path = tmp_path / "missing" / "dir" / "boxgrid.log"
        assert result_logger.set_log_file(str(path)) == ResultCode.FILE_ERROR

    def test_report_without_logger(self):
        assert report(None, "silent", ResultCode.WRONG_DIM) == ResultCode.WRONG_DIM


class TestFailureLogging:
    """Отказы core-операций логируются через переданный логгер."""

    def test_vector_create_failure_logged(self, result_logger, caplog):
        caplog.set_level(logging.INFO, logger="tests.result_logger")
        result = Vector.create([], result_logger)

        assert result.code == ResultCode.WRONG_DIM
        assert "ERROR (wrong dimension): in Vector.create" in caplog.text

    def test_region_create_failure_logged(self, result_logger, caplog):
        caplog.set_level(logging.INFO, logger="tests.result_logger")
        low = Vector.create([1.0]).value
        high = Vector.create([0.0]).value

        assert Region.create(low, high, result_logger).code == ResultCode.WRONG_ARGUMENT
        assert "ERROR (wrong argument): in Region.create" in caplog.text

    def test_cursor_open_failure_logged(self, result_logger, caplog):
        caplog.set_level(logging.INFO, logger="tests.result_logger")
        region = Region.create(
            Vector.create([0.0]).value, Vector.create([1.0]).value, result_logger
        ).value

        assert region.begin(Vector.create([-1.0]).value).code == ResultCode.WRONG_ARGUMENT
        assert "incorrect step" in caplog.text

    def test_point_set_duplicate_logged(self, result_logger, caplog):
        caplog.set_level(logging.INFO, logger="tests.result_logger")
        s = PointSet(result_logger)
        s.insert(Vector.create([1.0]).value, Norm.L2, 1e-6)
        s.insert(Vector.create([1.0]).value, Norm.L2, 1e-6)

        assert "ERROR (multiple definition)" in caplog.text

    def test_no_logger_no_records(self, caplog):
        caplog.set_level(logging.INFO)
        Vector.create([])

        assert caplog.records == []

"""
Unit tests for the logging manager and structured formatter.
"""

import json
import logging
import sys

import pytest

from bitcoin_de_client.logging import (
    LoggerManager,
    StructuredFormatter,
    get_logger,
    get_logger_manager,
    initialize_logging,
)


def read_records(path):
    return [json.loads(line) for line in path.read_text(encoding='utf-8').splitlines() if line]


class TestStructuredFormatter:

    def test_json_output_with_extra(self):
        record = logging.LogRecord('bitcoin_de_client.test', logging.INFO, __file__, 10,
                                   'hello %s', ('world',), None)
        record.method_name = 'showRates'

        data = json.loads(StructuredFormatter().format(record))

        assert data['message'] == 'hello world'
        assert data['level'] == 'INFO'
        assert data['logger'] == 'bitcoin_de_client.test'
        assert data['extra'] == {'method_name': 'showRates'}

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'failed', (), sys.exc_info())

        data = json.loads(StructuredFormatter(include_extra=False).format(record))

        assert data['exception']['type'] == 'ValueError'
        assert data['exception']['message'] == 'boom'
        assert 'extra' not in data


class TestLoggerManager:

    def test_invalid_level(self, tmp_path):
        with pytest.raises(ValueError):
            LoggerManager(log_dir=str(tmp_path), log_level='LOUD')

    def test_writes_main_and_error_logs(self, tmp_path):
        manager = LoggerManager(log_dir=str(tmp_path), log_level='DEBUG', console_output=False)
        try:
            logger = manager.get_logger('bitcoin_de_client.test')
            logger.info("informational")
            logger.error("broken")
        finally:
            manager.shutdown()

        messages = [record['message'] for record in read_records(tmp_path / 'bitcoin_de_client.log')]
        assert 'informational' in messages
        assert 'broken' in messages

        errors = [record['message'] for record in read_records(tmp_path / 'errors.log')]
        assert errors == ['broken']

    def test_log_api_call(self, tmp_path):
        manager = LoggerManager(log_dir=str(tmp_path), console_output=False)
        try:
            manager.log_api_call('showRates', 'ok', {'credits': 20})
            manager.log_api_call('createOrder', 'api_error', {'status_code': 400})
        finally:
            manager.shutdown()

        records = read_records(tmp_path / 'bitcoin_de_client.log')
        calls = [r for r in records if r.get('extra', {}).get('event_type') == 'api_call']
        assert [c['extra']['method_name'] for c in calls] == ['showRates', 'createOrder']
        assert calls[0]['level'] == 'INFO'
        assert calls[1]['level'] == 'WARNING'

    def test_log_error_with_context(self, tmp_path):
        manager = LoggerManager(log_dir=str(tmp_path), console_output=False)
        try:
            manager.log_error_with_context(RuntimeError("failed"), {'method_name': 'showRates'})
        finally:
            manager.shutdown()

        [record] = read_records(tmp_path / 'errors.log')
        assert record['extra']['error_type'] == 'RuntimeError'
        assert record['extra']['context'] == {'method_name': 'showRates'}

    def test_plain_format(self, tmp_path):
        manager = LoggerManager(log_dir=str(tmp_path), console_output=False, structured_format=False)
        try:
            get_logger('bitcoin_de_client.plain').warning("plain text")
        finally:
            manager.shutdown()

        content = (tmp_path / 'bitcoin_de_client.log').read_text(encoding='utf-8')
        assert 'WARNING - plain text' in content

    def test_shutdown_detaches_handlers(self, tmp_path):
        root = logging.getLogger()
        before = list(root.handlers)
        manager = LoggerManager(log_dir=str(tmp_path), console_output=True)
        assert len(root.handlers) == len(before) + 3
        manager.shutdown()
        assert root.handlers == before


class TestGlobalLogging:

    def test_initialize_replaces_previous_manager(self, tmp_path):
        first = initialize_logging(log_dir=str(tmp_path / 'a'), console_output=False)
        second = initialize_logging(log_dir=str(tmp_path / 'b'), console_output=False)

        assert get_logger_manager() is second
        assert first._handlers == []
        assert (tmp_path / 'b').is_dir()

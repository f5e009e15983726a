"""Tests for logging configuration, hooks and failure events."""

from __future__ import annotations

from typing import Any

import pytest
from bassert import AssertionFailedError, bassert, init
from bassert._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)


class TestLogHooks:
    def test_hook_receives_log_events(self) -> None:
        received: list[dict[str, Any]] = []
        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(received.append)

        get_logger('test').info('Test message', extra_field='extra_value')

        entries = [e for e in received if e.get('event') == 'Test message']
        assert len(entries) == 1
        assert entries[0]['extra_field'] == 'extra_value'

    def test_remove_hook(self) -> None:
        calls: list[str] = []

        def hook(event_dict: dict[str, Any]) -> None:
            calls.append('called')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(hook)
        logger = get_logger('test')
        logger.info('First')
        assert len(calls) == 1

        remove_log_hook(hook)
        logger.info('Second')
        assert len(calls) == 1

    def test_clear_hooks(self) -> None:
        calls: list[str] = []
        configure_logging(level='DEBUG', json_output=False)
        add_log_hook(lambda event_dict: calls.append('hook1'))
        add_log_hook(lambda event_dict: calls.append('hook2'))
        logger = get_logger('test')
        logger.info('First')
        assert calls == ['hook1', 'hook2']

        clear_log_hooks()
        logger.info('Second')
        assert calls == ['hook1', 'hook2']

    def test_hook_exception_does_not_break_logging(self) -> None:
        calls: list[str] = []

        def bad_hook(event_dict: dict[str, Any]) -> None:
            raise RuntimeError('Hook failed')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(bad_hook)
        add_log_hook(lambda event_dict: calls.append('good'))

        get_logger('test').info('Test')
        assert calls == ['good']


class TestFailureEvents:
    def test_failure_logged_when_configured(self) -> None:
        received: list[dict[str, Any]] = []
        init(log_level='ERROR')
        add_log_hook(received.append)

        a = 1
        with pytest.raises(AssertionFailedError):
            bassert('a == 2')

        events = [e for e in received if e.get('event') == 'assertion_failed']
        assert len(events) == 1
        assert events[0]['expression'] == 'a == 2'
        assert events[0]['kind'] == 'EQ'
        assert events[0]['operands'] == [{'text': 'a', 'value': '1'}, {'text': '2', 'value': '2'}]
        assert events[0]['message'] is None

    def test_failure_event_carries_message_and_match_subject(self) -> None:
        received: list[dict[str, Any]] = []
        init(log_level='ERROR')
        add_log_hook(received.append)

        val = 'xyzzy'
        with pytest.raises(AssertionFailedError):
            bassert('None = val, "got {}", val')

        (event,) = [e for e in received if e.get('event') == 'assertion_failed']
        assert event['kind'] == 'MATCH'
        assert event['operands'] == [{'text': 'val', 'value': "'xyzzy'"}]
        assert event['message'] == 'got xyzzy'
        assert event['logger'] == 'bassert'

    def test_pass_not_logged(self) -> None:
        received: list[dict[str, Any]] = []
        init(log_level='DEBUG')
        add_log_hook(received.append)

        a = 1
        bassert('a == 1')
        assert received == []

    def test_silent_without_log_level(self) -> None:
        received: list[dict[str, Any]] = []
        configure_logging(level='DEBUG')
        add_log_hook(received.append)
        init()

        a = 1
        with pytest.raises(AssertionFailedError):
            bassert('a == 2')
        assert [e for e in received if e.get('event') == 'assertion_failed'] == []

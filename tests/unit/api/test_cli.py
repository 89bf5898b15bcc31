"""
Tests for the process-nbn-applications CLI.

Covers:
- Summary line printed, exit code 0
- SelectionFault -> stderr, exit code 1
- Invalid configuration -> exit code 1, nothing dispatched
"""

from unittest.mock import patch

import pytest

from src.api.cli import main, parse_args
from src.application.models import DispatchResult
from src.domain.shared.exceptions import SelectionFault


@pytest.fixture
def build_handler():
    with patch("src.api.cli.build_dispatch_handler") as build:
        yield build


def test_prints_dispatch_summary(build_handler, capsys):
    build_handler.return_value.handle.return_value = DispatchResult(
        dispatched_count=2,
        application_ids=[],
        message="Dispatched 2 application(s) for NBN order processing.",
    )

    assert main([]) == 0

    assert capsys.readouterr().out.strip() == (
        "Dispatched 2 application(s) for NBN order processing."
    )


def test_nothing_to_process_is_success(build_handler, capsys):
    build_handler.return_value.handle.return_value = DispatchResult(
        dispatched_count=0,
        application_ids=[],
        message="No NBN applications to process.",
    )

    assert main([]) == 0
    assert "No NBN applications to process." in capsys.readouterr().out


def test_selection_fault_exits_with_error(build_handler, capsys):
    build_handler.return_value.handle.side_effect = SelectionFault(
        "Could not read eligible applications", original_error=ConnectionError("down")
    )

    assert main(["--verbose"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Could not read eligible applications" in captured.err


def test_verbose_flag():
    assert parse_args(["-v"]).verbose is True
    assert parse_args([]).verbose is False


def test_invalid_configuration_exits_before_dispatch(build_handler, capsys, monkeypatch):
    monkeypatch.setenv("NBN_B2B_TIMEOUT", "thirty")

    assert main([]) == 1

    build_handler.assert_not_called()
    assert "Invalid order pipeline configuration" in capsys.readouterr().err

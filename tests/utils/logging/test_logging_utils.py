# ABOUTME: Tests for logger helpers and context binding
# ABOUTME: Validates operation ids, bound context and failure logging on exit

from unittest.mock import MagicMock

import pytest

from gh_ccimg.utils.logging import LogContext, generate_operation_id, get_logger, with_pipeline_context


class TestGetLogger:
    def test_returns_usable_logger(self):
        logger = get_logger("gh_ccimg.tests")

        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_auto_detects_name(self):
        assert get_logger() is not None


class TestOperationId:
    def test_short_and_unique(self):
        first, second = generate_operation_id(), generate_operation_id()

        assert len(first) == 8
        assert first != second


class TestLogContext:
    def test_binds_context(self):
        base = MagicMock()

        with LogContext(base, target="octo/repo#1") as bound:
            assert bound is base.bind.return_value

        base.bind.assert_called_once_with(target="octo/repo#1")
        bound.error.assert_not_called()

    def test_logs_failure_and_propagates(self):
        base = MagicMock()

        with pytest.raises(RuntimeError):
            with LogContext(base, stage="download"):
                raise RuntimeError("boom")

        base.bind.return_value.error.assert_called_once_with(
            "Context operation failed", error="boom", error_type="RuntimeError"
        )

    def test_pipeline_context_carries_operation_id(self):
        context = with_pipeline_context("extract", target="octo/repo#1")

        assert context.context["pipeline"] == "extract"
        assert context.context["target"] == "octo/repo#1"
        assert len(context.context["operation_id"]) == 8

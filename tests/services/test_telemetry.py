"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Generator

import pytest

from tiqdb.services.result import ServiceResult
from tiqdb.services.telemetry import (
    Span,
    _current_span,
    set_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    set_telemetry(False)
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        root.children.append(child)
        child.annotate("rows", 3)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["name"] == "root"
        assert d["children"][0]["annotations"] == {"rows": 3}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_no_parent_yields_none(self) -> None:
        set_telemetry(True)
        with trace_span("x") as span:
            assert span is None


class _Service:
    @traced
    async def op(self) -> ServiceResult:
        with trace_span("step") as span:
            if span:
                span.annotate("k", "v")
            await asyncio.sleep(0)
        return ServiceResult(ok=True, op="op")

    @traced
    async def boom(self) -> ServiceResult:
        raise RuntimeError("boom")


class TestTraced:
    async def test_disabled_leaves_meta_empty(self) -> None:
        result = await _Service().op()
        assert result.meta is None

    async def test_enabled_injects_span_tree(self) -> None:
        set_telemetry(True)
        result = await _Service().op()
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "_Service.op"
        assert telemetry["children"][0]["name"] == "step"
        assert telemetry["children"][0]["annotations"] == {"k": "v"}

    async def test_span_reset_after_call(self) -> None:
        set_telemetry(True)
        await _Service().op()
        assert _current_span.get() is None

    async def test_exception_propagates_and_resets(self) -> None:
        set_telemetry(True)
        with pytest.raises(RuntimeError):
            await _Service().boom()
        assert _current_span.get() is None

    async def test_concurrent_calls_do_not_share_spans(self) -> None:
        set_telemetry(True)
        first, second = await asyncio.gather(_Service().op(), _Service().op())
        assert first.meta is not None and second.meta is not None
        assert len(first.meta["telemetry"]["children"]) == 1
        assert len(second.meta["telemetry"]["children"]) == 1

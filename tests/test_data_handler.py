"""Tests for the pending/fulfilled/rejected invocation contract."""
from __future__ import annotations

import asyncio
import threading

import pytest

from pyunspecd.data_handler import InvocationState, invoke_data_source
from pyunspecd.errors import FunctionNotFoundError


def _run(functions, name, params=None):
    events = []
    result = asyncio.run(
        invoke_data_source(
            functions,
            name,
            params,
            on_pending=lambda: events.append(("pending",)),
            on_fulfilled=lambda v: events.append(("fulfilled", v)),
            on_rejected=lambda e: events.append(("rejected", e)),
        )
    )
    return events, result


class TestInvokeDataSource:
    """Lifecycle ordering and outcomes."""

    def test_sync_function(self):
        events, result = _run({"getUser": lambda p: {"id": p["id"]}}, "getUser", {"id": 7})
        assert events == [("pending",), ("fulfilled", {"id": 7})]
        assert result.ok
        assert result.state is InvocationState.FULFILLED

    def test_async_function(self):
        async def load(params):
            await asyncio.sleep(0)
            return [1, 2]

        events, _ = _run({"load": load}, "load", {})
        assert events == [("pending",), ("fulfilled", [1, 2])]

    def test_none_is_a_value(self):
        events, result = _run({"noop": lambda p: None}, "noop")
        assert events == [("pending",), ("fulfilled", None)]
        assert result.ok

    def test_params_passed_through(self):
        seen = []
        _run({"f": seen.append}, "f")
        _run({"f": seen.append}, "f", {})
        assert seen == [None, {}]

    def test_missing_function(self):
        events, result = _run({"getUser": lambda p: None}, "loadUsers")
        assert [e[0] for e in events] == ["pending", "rejected"]
        err = events[1][1]
        assert isinstance(err, FunctionNotFoundError)
        assert str(err) == "Function 'loadUsers' not found in spec. Available functions: getUser"
        assert result.error is err

    def test_not_callable(self):
        events, _ = _run({"loadUsers": "nope"}, "loadUsers")
        assert [e[0] for e in events] == ["pending", "rejected"]
        assert str(events[1][1]) == "'loadUsers' exists in spec but is not a function. Got: str"

    @pytest.mark.parametrize("functions,name", [(None, "f"), ([], "f"), ({"f": len}, ""), ({"f": len}, None)])
    def test_bad_inputs_reject(self, functions, name):
        events, result = _run(functions, name)
        assert [e[0] for e in events] == ["pending", "rejected"]
        assert result.state is InvocationState.REJECTED

    def test_exception_passed_unmodified(self):
        boom = ValueError("bad row")

        def fail(params):
            raise boom

        events, result = _run({"fail": fail}, "fail")
        assert events == [("pending",), ("rejected", boom)]
        assert result.error is boom
        assert not result.ok

    def test_async_exception(self):
        async def fail(params):
            raise KeyError("k")

        events, _ = _run({"fail": fail}, "fail")
        assert events[1][0] == "rejected"
        assert isinstance(events[1][1], KeyError)

    def test_calls_are_independent(self):
        calls = []

        def f(params):
            calls.append(params)
            if params == "bad":
                raise RuntimeError("x")
            return params

        first, _ = _run({"f": f}, "f", "bad")
        second, _ = _run({"f": f}, "f", "good")
        assert first[1][0] == "rejected"
        assert second == [("pending",), ("fulfilled", "good")]
        assert calls == ["bad", "good"]

    def test_default_callbacks(self):
        result = asyncio.run(invoke_data_source({"f": lambda p: 1}, "f"))
        assert result.value == 1
        assert result.function_name == "f"

    def test_sync_handler_runs_off_the_loop_thread(self):
        loop_thread = threading.get_ident()
        events, _ = _run({"where": lambda p: threading.get_ident()}, "where")
        assert events[1][0] == "fulfilled"
        assert events[1][1] != loop_thread

    def test_async_handler_runs_on_the_loop_thread(self):
        async def where(params):
            return threading.get_ident()

        events, _ = _run({"where": where}, "where")
        assert events[1][1] == threading.get_ident()

"""Uniform invocation of user-supplied tool functions.

Every UI surface (record loaders, action buttons, table loaders/updaters,
form submits) calls into a tool's ``functions`` through
:func:`invoke_data_source`, so they all see the same lifecycle:

    pending -> fulfilled(value) | rejected(error)

Exactly one terminal callback fires per call, always after ``on_pending``.
Errors are delivered as data through ``on_rejected`` and never raised out of
this function.
"""
from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from .errors import FunctionNotFoundError


class InvocationState(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass
class InvocationResult:
    function_name: str
    params: Any
    state: InvocationState = InvocationState.PENDING
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.state is InvocationState.FULFILLED


def _noop(*_: Any) -> None:
    return None


def _resolve_function(spec_functions: Any, function_name: Any) -> Callable[[Any], Any]:
    if not isinstance(spec_functions, Mapping):
        raise TypeError(
            f"Invalid spec functions while calling '{function_name}': "
            "expected a mapping of function implementations"
        )
    if not isinstance(function_name, str) or not function_name:
        raise ValueError(f"Invalid function name {function_name!r}: expected a non-empty string")
    if function_name not in spec_functions:
        raise FunctionNotFoundError(function_name, list(spec_functions.keys()))
    target = spec_functions[function_name]
    if not callable(target):
        raise TypeError(f"'{function_name}' exists in spec but is not a function. Got: {type(target).__name__}")
    return target


async def invoke_data_source(
    spec_functions: Mapping[str, Callable[[Any], Any]],
    function_name: str,
    params: Any = None,
    on_pending: Callable[[], Any] = _noop,
    on_fulfilled: Callable[[Any], Any] = _noop,
    on_rejected: Callable[[BaseException], Any] = _noop,
) -> InvocationResult:
    """Call ``spec_functions[function_name](params)`` under the pending/settled contract.

    ``params`` is passed through untouched (``None`` included); the callee
    owns its defaults. ``async def`` handlers are awaited on the running
    loop; plain functions run via ``asyncio.to_thread``. Awaitable return
    values are awaited. ``None`` is a valid fulfilled value.
    """
    result = InvocationResult(function_name=function_name, params=params)
    on_pending()

    try:
        target = _resolve_function(spec_functions, function_name)
        if inspect.iscoroutinefunction(target):
            value = await target(params)
        else:
            # off the event loop
            value = await asyncio.to_thread(target, params)
        if inspect.isawaitable(value):
            value = await value
    except Exception as e:
        result.state = InvocationState.REJECTED
        result.error = e
        on_rejected(e)
        return result

    result.state = InvocationState.FULFILLED
    result.value = value
    on_fulfilled(value)
    return result

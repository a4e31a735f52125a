"""Async execution for CLI commands.

Procedures are coroutines; Click expects synchronous callables. This module
bridges the two so every command runs its pipeline through one event loop.
"""

import asyncio
import functools
from collections.abc import Callable, Coroutine
from typing import Any, ParamSpec, TypeVar

T = TypeVar("T")
P = ParamSpec("P")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run async code with proper event loop handling.

    Args:
        coro: The coroutine to execute

    Returns:
        The result of the coroutine

    Raises:
        Any exception raised by the coroutine is propagated
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No running loop - the normal case for CLI commands
        return asyncio.run(coro)

    # Invoked from inside a running loop (e.g. an embedding host)
    import nest_asyncio

    nest_asyncio.apply()
    loop = asyncio.get_event_loop()
    return loop.run_until_complete(coro)


def async_command(
    f: Callable[P, Coroutine[Any, Any, T]],
) -> Callable[P, T]:
    """Decorator that wraps async functions for Click commands.

    Usage:
        @click.command()
        @async_command
        async def my_command(arg: str) -> None:
            result = await some_async_operation(arg)
            click.echo(result)
    """

    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return run_async(f(*args, **kwargs))

    return wrapper

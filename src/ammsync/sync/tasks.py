import asyncio
from collections.abc import Coroutine, Iterable
from typing import Any

from ammsync.exceptions import AmmSyncError, WorkerFault


def _leaf_exceptions(group: BaseExceptionGroup) -> list[BaseException]:
    leaves: list[BaseException] = []
    for exc in group.exceptions:
        if isinstance(exc, BaseExceptionGroup):
            leaves.extend(_leaf_exceptions(exc))
        else:
            leaves.append(exc)
    return leaves


def _select_error(group: BaseExceptionGroup) -> BaseException:
    """
    Pick the single exception to surface from a failed task group.

    An exception that is not an `AmmSyncError` is a fault, and takes priority over any reported
    error. It is wrapped in a `WorkerFault` with the original as its cause. A `WorkerFault` raised
    by a nested join is passed through. Otherwise the first reported error is surfaced unchanged.
    """

    errors = _leaf_exceptions(group)

    for exc in errors:
        if not isinstance(exc, AmmSyncError):
            fault = WorkerFault(exc)
            fault.__cause__ = exc
            return fault

    for exc in errors:
        if isinstance(exc, WorkerFault):
            return exc

    return errors[0]


async def gather_or_raise[T](coroutines: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """
    Run the coroutines concurrently and return their results in submission order.

    The first failure cancels the remaining tasks, and no partial result is returned.
    """

    try:
        async with asyncio.TaskGroup() as task_group:
            tasks = [task_group.create_task(coroutine) for coroutine in coroutines]
    except BaseExceptionGroup as group:
        error = _select_error(group)
    else:
        return [task.result() for task in tasks]

    raise error

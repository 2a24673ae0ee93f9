"""Ordered fallback over candidate provider methods.

A cascade tries each method in turn and stops at the first one that
does not fail. A method that raises counts as a failure. Warnings stop
the cascade as well: they mean no corrective action was attempted, so
trying another method would not clarify anything.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from winprovision.models.item import Item
from winprovision.models.outcome import MethodResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Method:
    """One candidate way to realize an item's desired state.

    Attributes:
        name: Short label used in logs and outcome details.
        run: Callable performing the method.
    """

    name: str
    run: Callable[[Item], MethodResult]


def run_cascade(methods: Sequence[Method], item: Item) -> MethodResult:
    """Run methods in order until one succeeds or warns.

    Args:
        methods: Candidate methods in priority order.
        item: Item being resolved.

    Returns:
        Result of the first non-failing method, or the last failure.
    """
    if not methods:
        return MethodResult.error(f"No install method for provider {item.provider.value}")

    result = MethodResult.error("not attempted")
    for index, method in enumerate(methods):
        logger.debug("Trying %s for %s", method.name, item.key)
        try:
            result = method.run(item)
        except Exception as e:  # noqa: BLE001 - the next method still gets its turn
            logger.exception("%s raised for %s", method.name, item.key)
            result = MethodResult.error(f"{method.name} failed: {e}")
        if not result.failed:
            return result
        if index < len(methods) - 1:
            logger.info(
                "%s failed for %s (%s); falling back to %s",
                method.name,
                item.key,
                result.message,
                methods[index + 1].name,
            )
    return result

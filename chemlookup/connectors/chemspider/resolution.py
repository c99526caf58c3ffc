"""
Disambiguation of searches that return several CSIDs.

A chooser is any callable ``chooser(query, candidates)`` returning one of the
candidates or ``None``; coroutine functions are accepted as well.
``console_prompt`` is the interactive chooser: it lists the candidates and
reads a row number from the terminal.
"""

import inspect
import logging
from typing import Awaitable, Callable, Sequence

from chemlookup.connectors.chemspider.schemas import ResolutionPolicy

logger = logging.getLogger(__name__)

Chooser = Callable[[str, list[str]], str | None | Awaitable[str | None]]


def console_prompt(
    query: str,
    candidates: Sequence[str],
    *,
    input_func: Callable[[str], str] | None = None,
    output_func: Callable[[str], None] | None = None,
) -> str | None:
    """
    Ask the user to pick one CSID by its 1-based row number.

    Empty, non-numeric or out-of-range input returns None, as does a
    closed stdin (EOF).
    """
    input_func = input_func or input
    output_func = output_func or print

    output_func(f"More than one hit found for '{query}'!")
    for row, csid in enumerate(candidates, start=1):
        output_func(f"  {row}: {csid}")

    try:
        take = input_func(
            "Enter row number of CSID (other inputs will return no result): "
        ).strip()
    except EOFError:
        take = ""

    if not take.isdigit() or not 1 <= int(take) <= len(candidates):
        logger.warning(f"ChemSpider invalid selection {take!r} for '{query}'")
        return None

    chosen = candidates[int(take) - 1]
    logger.info(f"ChemSpider input accepted, took CSID '{chosen}' for '{query}'")
    return chosen


async def choose(
    query: str,
    candidates: Sequence[str],
    policy: ResolutionPolicy,
    chooser: Chooser | None = None,
) -> str | None:
    """
    Pick one CSID out of several according to ``policy``.

    Returns None when the policy declines to choose or the chooser returns
    something that is not one of the candidates.
    """
    if policy == ResolutionPolicy.FIRST_MATCH:
        return candidates[0] if candidates else None

    if policy == ResolutionPolicy.FAIL:
        return None

    if chooser is None:
        raise ValueError("ResolutionPolicy.CALLBACK requires a chooser")

    chosen = chooser(query, list(candidates))
    if inspect.isawaitable(chosen):
        chosen = await chosen

    if chosen is None:
        return None
    chosen = str(chosen)
    if chosen not in candidates:
        logger.warning(
            f"ChemSpider chooser returned '{chosen}' which is not a candidate "
            f"for '{query}'"
        )
        return None
    return chosen

"""
Weighted random selection.

Items are drawn with probability proportional to their weight. Without a
repeat cap every draw sees the full pool (sampling with replacement). With
a cap of N every entry starts with N copies and each draw uses one up, so
no literal entry can come up more than N times. The odds are the same as
for the item list repeated N times with drawn entries removed.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .core import INT64_MAX, NO_REPEAT_LIMIT
from .errors import PickerError, UnselectableDefinitionError, WeightOverflowError
from .parser import PickRequest, RandomItem, parse_definition

logger = logging.getLogger("random_picker.sampler")


def total_weight(pool: Sequence[RandomItem]) -> int:
    """Sum the weights of a pool, refusing anything past the 64-bit range."""
    weight_sum = 0
    for item in pool:
        weight_sum += item.weight
        if weight_sum > INT64_MAX:
            raise WeightOverflowError(
                f"The sum of the provided weights cannot be more than: {INT64_MAX}"
            )
    return weight_sum


def select_index(pool: Sequence[RandomItem], rng=None) -> int:
    """
    Pick one position of the pool according to the weights.

    Args:
        pool: Items to choose from
        rng: Anything with ``randrange`` (defaults to the ``random`` module)

    Returns:
        Index of the selected item

    Raises:
        WeightOverflowError: the weights add up past the 64-bit range
        UnselectableDefinitionError: the weights add up to zero
    """
    rng = rng or random
    weight_sum = total_weight(pool)
    if weight_sum == 0:
        raise UnselectableDefinitionError(
            "The sum of the provided weights must be greater than 0"
        )

    point = rng.randrange(weight_sum)
    for index, item in enumerate(pool):
        if point < item.weight:
            return index
        point -= item.weight

    raise AssertionError("Random selection fell off the end of the pool")


def sample(
    items: Sequence[RandomItem],
    result_count: int = 1,
    max_repeat_count: int = NO_REPEAT_LIMIT,
    rng=None,
) -> List[str]:
    """
    Draw up to ``result_count`` values from ``items``.

    A ``max_repeat_count`` of zero or less means no cap. With a cap the
    result can be shorter than requested once the pool runs dry.
    """
    capped = max_repeat_count > 0
    pool = list(items)
    # Copies left per entry: the pool repeated max_repeat_count times,
    # without building it
    remaining = [max_repeat_count] * len(pool)

    values = []
    for _ in range(result_count):
        if not pool:
            break

        if capped:
            view = [RandomItem(item.value, item.weight * left) for item, left in zip(pool, remaining)]
            index = select_index(view, rng)
        else:
            index = select_index(pool, rng)
        values.append(pool[index].value)

        if capped:
            remaining[index] -= 1
            if remaining[index] == 0:
                # Swap-remove: order inside the pool does not affect the odds
                pool[index], remaining[index] = pool[-1], remaining[-1]
                pool.pop()
                remaining.pop()

    logger.debug(
        "Drew %d of %d requested values (cap %s)",
        len(values),
        result_count,
        max_repeat_count if capped else "none",
    )
    return values


@dataclass
class PickOutcome:
    """Result of a pick: the drawn values, or the reason there are none."""

    request: PickRequest
    values: List[str] = field(default_factory=list)
    error: Optional[PickerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def short(self) -> bool:
        """True when a repeat cap ran the pool dry before all draws were made."""
        return self.ok and len(self.values) < self.request.result_count


def pick(request: PickRequest, rng=None) -> PickOutcome:
    """Parse and sample a request, reporting expected failures as a value."""
    try:
        items = parse_definition(request.definition)
        values = sample(items, request.result_count, request.max_repeat_count, rng)
    except PickerError as e:
        return PickOutcome(request=request, error=e)
    return PickOutcome(request=request, values=values)

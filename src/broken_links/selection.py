"""Selection of the bounded set of links to follow."""

import logging
import random
from typing import Optional, Sequence

from broken_links.models import Link, LinkOrder

logger = logging.getLogger(__name__)


def select_links(
    links: Sequence[Link],
    limit: int,
    order: LinkOrder = LinkOrder.SEQUENTIAL,
    rng: Optional[random.Random] = None,
) -> list[Link]:
    """Pick the links to navigate.

    link_limit counts the origin link as one of the checked links, so at
    most ``limit - 1`` followed links are returned.

    Args:
        links: Extracted links, in page order
        limit: Configured link_limit (origin included)
        order: SEQUENTIAL keeps page order, RANDOM shuffles first
        rng: Random source for RANDOM order

    Returns:
        A new list; the input is never modified
    """
    candidates = list(links)

    if order == LinkOrder.RANDOM:
        # Fisher-Yates
        (rng or random).shuffle(candidates)

    keep = max(limit - 1, 0)
    selected = candidates[:keep]

    logger.debug(
        f"Selected {len(selected)} of {len(candidates)} links "
        f"(limit={limit}, order={order.value})"
    )
    return selected

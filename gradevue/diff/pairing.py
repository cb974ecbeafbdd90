"""Match old and new versions of the same entities by a stable key."""

from collections import defaultdict, deque
from typing import Callable, Hashable, Optional, Sequence, TypeVar

V = TypeVar("V")

Pair = tuple[Optional[V], Optional[V]]


def pair(old: Sequence[V], new: Sequence[V], key_of: Callable[[V], Hashable]) -> list[Pair]:
    """Pair elements of ``old`` and ``new`` that share a key.

    Returns one ``(old, new)`` tuple per old element, in old order, with
    ``None`` where nothing in ``new`` matched (removed). New elements nobody
    claimed follow as ``(None, new)`` in new order (added). Each element
    lands in exactly one pair; repeated keys are matched first come first
    served.
    """
    unclaimed: dict[Hashable, deque[int]] = defaultdict(deque)
    for i, value in enumerate(new):
        unclaimed[key_of(value)].append(i)

    pairs: list[Pair] = []
    claimed = set()
    for value in old:
        candidates = unclaimed.get(key_of(value))
        if candidates:
            i = candidates.popleft()
            claimed.add(i)
            pairs.append((value, new[i]))
        else:
            pairs.append((value, None))

    pairs.extend((None, value) for i, value in enumerate(new) if i not in claimed)
    return pairs

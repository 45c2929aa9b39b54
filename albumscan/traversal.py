"""Breadth-first walk shared by the album scanner and the photo classifier."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")


def walk_breadth_first(start: T, visit: Callable[[T], Optional[Iterable[T]]]) -> bool:
    """Visit nodes in FIFO order starting at start.

    visit returns the children to enqueue, or None to stop the walk.
    Returns True if the queue was exhausted, False if visit stopped it.
    """
    queue = deque([start])
    while queue:
        node = queue.popleft()
        children = visit(node)
        if children is None:
            return False
        queue.extend(children)
    return True

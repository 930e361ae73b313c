"""
Depth-first directory walk with an explicit prune signal per node
"""

from enum import Enum
from pathlib import Path
from typing import Callable


class Visit(Enum):
    DESCEND = "descend"
    PRUNE = "prune"


def walk(root: Path, visit: Callable[[Path], Visit]) -> None:
    """Visit root and its descendants, parents before children.

    Children are visited in sorted name order. A node is only descended into
    if `visit` returned DESCEND and the node is a real directory once `visit`
    is done with it, so a visitor may replace a symlink with the directory it
    pointed at and still have it walked.
    """
    stack = [Path(root)]
    while stack:
        node = stack.pop()
        if visit(node) is Visit.PRUNE:
            continue
        if node.is_symlink() or not node.is_dir():
            continue
        # Reversed so the smallest name is popped first
        stack.extend(sorted(node.iterdir(), reverse=True))

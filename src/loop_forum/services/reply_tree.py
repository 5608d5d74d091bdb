"""Build threaded reply trees from flat, parent-referencing reply lists.

Replies are stored flat with an optional ``parent_reply_id``. The builder uses
an arena of nodes indexed by position: the first pass records each reply's
slot, the second pass attaches slot indexes to their parent's child list. The
nested ``ReplyNode`` structure is materialized only at the end.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from loop_forum.core.errors import DataIntegrityError
from loop_forum.schemas.reply import ReplyNode

__all__ = ["build_reply_forest", "flatten_forest"]


def build_reply_forest(
    replies: Sequence[ReplyNode],
    max_reply_depth: int = 3,
    max_nesting: int | None = None,
) -> list[ReplyNode]:
    """Arrange replies into a forest of root replies with nested children.

    Children keep the relative order they had in ``replies``, so the caller's
    sort (newest first, most upvoted first) carries into every level.

    Args:
        replies: Flat replies of a single post, already sorted.
        max_reply_depth: Depth from which nodes are marked ``can_reply=False``.
            It does not limit display nesting.
        max_nesting: When set, nodes at this depth keep all of their
            descendants as a flat, pre-ordered ``children`` list. Each
            descendant still reports its true ``depth`` and
            ``parent_reply_id``.

    Returns:
        Root replies, each carrying its subtree in ``children``.

    Raises:
        DataIntegrityError: If a reply id repeats, a parent id is not part of
            ``replies``, or parent links form a cycle.
    """
    arena: list[ReplyNode] = []
    slot_by_id: dict[int, int] = {}
    for reply in replies:
        if reply.id in slot_by_id:
            raise DataIntegrityError(f"Reply {reply.id} appears more than once in thread")
        slot_by_id[reply.id] = len(arena)
        arena.append(reply.model_copy(update={"children": []}))

    child_slots: list[list[int]] = [[] for _ in arena]
    root_slots: list[int] = []
    for slot, node in enumerate(arena):
        if node.parent_reply_id is None:
            root_slots.append(slot)
            continue
        parent_slot = slot_by_id.get(node.parent_reply_id)
        if parent_slot is None:
            raise DataIntegrityError(
                f"Reply {node.id} references parent reply {node.parent_reply_id} "
                "which is not part of the same post"
            )
        child_slots[parent_slot].append(slot)

    # Iterative walk so deep threads do not hit the recursion limit.
    visited = 0
    stack: list[tuple[int, int, int | None]] = [(slot, 0, None) for slot in reversed(root_slots)]
    while stack:
        slot, depth, anchor = stack.pop()
        node = arena[slot]
        node.depth = depth
        node.can_reply = depth < max_reply_depth
        if anchor is not None:
            arena[anchor].children.append(node)
        elif max_nesting is not None and depth >= max_nesting:
            anchor = slot
        else:
            node.children = [arena[child] for child in child_slots[slot]]
        visited += 1
        stack.extend((child, depth + 1, anchor) for child in reversed(child_slots[slot]))

    if visited != len(arena):
        raise DataIntegrityError("Reply parent links form a cycle")

    return [arena[slot] for slot in root_slots]


def flatten_forest(forest: Iterable[ReplyNode]) -> list[ReplyNode]:
    """Return every node of ``forest`` in pre-order."""
    flat: list[ReplyNode] = []
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/delta/preprocess.py
"""Document preprocessing applied before Delta conversion.

Merging ordered lists
---------------------
Markdown ends an ordered list as soon as a list of a different kind starts,
so a numbered sequence interrupted by a bullet list parses as several
separate ordered lists, each numbered from its own start::

    1. one
    2. two
    - aside
    3. three        <- parsed as a new list starting at 3

``merge_consecutive_ordered_lists`` links such top-level ordered lists into
one logical list. Each ordered list in a run becomes a segment of a merge
group: a copy tagged with the group's ``list_group`` metadata id, whose
``start`` continues the numbering of the segments before it. Bullet lists
between the segments stay where they are and keep the group open; any
non-list block closes it. Nested lists are left alone.

The built-in handlers read neither ``start`` nor ``list_group``: a Delta
ordered list has no numbering of its own, so the merge leaves the emitted
operations unchanged. The tags are there for custom handlers, which see the
merged copies as ``ctx.node`` or among ``ctx.ancestors``.

"""

from __future__ import annotations

import logging
from dataclasses import replace

from md2delta.ast.nodes import Document, List, Node
from md2delta.constants import LIST_GROUP_METADATA_KEY

logger = logging.getLogger(__name__)


def _collect_ordered_runs(children: list[Node]) -> list[list[tuple[int, List]]]:
    """Return the ordered lists with their indexes, grouped by merge run."""
    runs: list[list[tuple[int, List]]] = []
    current: list[tuple[int, List]] = []

    for index, child in enumerate(children):
        if isinstance(child, List):
            if child.ordered:
                current.append((index, child))
            continue
        if current:
            runs.append(current)
            current = []

    if current:
        runs.append(current)

    return runs


def merge_consecutive_ordered_lists(document: Document) -> Document:
    """Link top-level ordered lists that are separated only by other lists.

    Parameters
    ----------
    document : Document
        Input document. It is not modified.

    Returns
    -------
    Document
        A document with the same children in the same order, where every
        ordered list belonging to a run of two or more has been replaced by a
        renumbered copy carrying ``metadata["list_group"]``. When there is
        nothing to merge, the input document is returned unchanged.

    Examples
    --------
        >>> doc = markdown_to_ast("1. a\\n\\n- b\\n\\n1. c")
        >>> merged = merge_consecutive_ordered_lists(doc)
        >>> [child.start for child in merged.children if child.ordered]
        [1, 2]

    """
    children = list(document.children)
    runs = [run for run in _collect_ordered_runs(children) if len(run) > 1]

    if not runs:
        return document

    for group_id, run in enumerate(runs):
        next_number = run[0][1].start

        for index, segment in run:
            children[index] = replace(
                segment,
                start=next_number,
                metadata={**segment.metadata, LIST_GROUP_METADATA_KEY: group_id},
            )
            next_number += len(segment.items)

        logger.debug("Merged %d ordered lists into list group %d", len(run), group_id)

    return replace(document, children=children)


__all__ = ["merge_consecutive_ordered_lists"]

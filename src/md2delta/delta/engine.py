#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/delta/engine.py
"""Handler-chain engine compiling a document tree into Delta operations.

The converter walks the tree depth-first. For each node it builds a
:class:`~md2delta.delta.handlers.HandlerContext` and offers it to the custom
handler (if any) and then to each built-in handler in order, stopping at the
first one that reports the node handled. Output is appended to a single
accumulator that lives only for the duration of one ``convert`` call.

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from md2delta.ast.nodes import Document, Node
from md2delta.delta.handlers import BUILTIN_HANDLERS, Directive, Handler, HandlerContext
from md2delta.delta.ops import Op
from md2delta.delta.preprocess import merge_consecutive_ordered_lists
from md2delta.exceptions import InvalidOptionsError
from md2delta.options.delta import DeltaOptions

logger = logging.getLogger(__name__)


class DeltaConverter:
    """Compile a document tree into a list of Delta insert operations.

    Parameters
    ----------
    handler : callable or None, default = None
        Custom handler tried before every built-in handler, for every node.
        Returning a falsy value hands the node on to the built-in chain.
    options : DeltaOptions or None, default = None
        Conversion options. Defaults to ``DeltaOptions()``.

    Raises
    ------
    InvalidOptionsError
        If options is not a DeltaOptions instance

    Examples
    --------
        >>> converter = DeltaConverter()
        >>> converter.convert(markdown_to_ast("*hi*"))
        [{'insert': 'hi', 'attributes': {'italic': True}}, {'insert': '\\n'}]

    """

    def __init__(self, handler: Optional[Handler] = None, options: Optional[DeltaOptions] = None):
        if options is not None and not isinstance(options, DeltaOptions):
            raise InvalidOptionsError(
                component_name=self.__class__.__name__,
                expected_type=DeltaOptions,
                received_type=type(options),
            )
        self.options = options or DeltaOptions()
        self.handler = handler

        handlers: list[Handler] = [handler] if handler is not None else []
        handlers.extend(BUILTIN_HANDLERS)
        self._handlers: tuple[Handler, ...] = tuple(handlers)

    def convert(self, document: Node) -> list[Op]:
        """Convert a tree into operations.

        Parameters
        ----------
        document : Node
            Root of the tree, normally a Document. Any node is accepted.

        Returns
        -------
        list of Op
            Operations in document order

        Notes
        -----
        When ``merge_ordered_lists`` is enabled and the root is a Document,
        consecutive ordered lists are linked first; see
        :func:`~md2delta.delta.preprocess.merge_consecutive_ordered_lists`.
        The input tree is never modified.

        """
        if self.options.merge_ordered_lists and isinstance(document, Document):
            document = merge_consecutive_ordered_lists(document)

        ops: list[Op] = []
        consumed: dict[int, Node] = {}

        def process(node: Node, ancestors: Sequence[Node] = ()) -> Optional[Directive]:
            ctx = HandlerContext(
                node=node,
                ancestors=tuple(ancestors),
                ops=ops,
                process=process,
                options=self.options,
                consumed=consumed,
            )
            for handler in self._handlers:
                result = handler(ctx)
                if result:
                    return result if isinstance(result, Directive) else Directive.DONE

            # Only reachable when the fallback has been bypassed
            logger.debug("No handler completed %s; it produced no output", type(node).__name__)
            return None

        process(document)
        logger.debug("Converted %s into %d operations", type(document).__name__, len(ops))
        return ops


__all__ = ["DeltaConverter"]

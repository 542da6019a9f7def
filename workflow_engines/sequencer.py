"""
workflow_engines.sequencer -- Sequence numbers and previous steps.

Responsibility:
    Given task nodes in chain order, assign each its 1-based sequence
    number and the list of task nodes before it, nearest first.  The
    nearest-first order is what send-back and predecessor pickers show.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - CONTIGUOUS_SEQUENCE: numbers are exactly 1..n in input order.
    - PREVIOUS_STEPS_ACCURACY: the task at index i gets i previous steps.
    - Full recomputation: nothing from a node's earlier derived state is
      read, so the output depends on input order and labels only.

Chain order:
    ``order_nodes`` sorts by ascending y.  ``sorted`` is stable, so nodes
    sharing a y keep their relative order from the input tuple.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from workflow_engines.tracer import traced_engine
from workflow_kernel.domain.graph import Node, PreviousStep, TaskData


def order_nodes(nodes: Iterable[Node]) -> tuple[Node, ...]:
    """Chain order: ascending y, ties kept in input order."""
    return tuple(sorted(nodes, key=lambda n: n.position.y))


@traced_engine("sequencer", "1.0", fingerprint_fields=("ordered_task_nodes",))
def resequence(ordered_task_nodes: tuple[Node, ...]) -> tuple[Node, ...]:
    """Recompute ``sequence_number`` and ``previous_steps`` for ordered task nodes."""
    steps: list[PreviousStep] = []
    result: list[Node] = []
    for index, node in enumerate(ordered_task_nodes):
        data = node.data
        assert isinstance(data, TaskData), f"{node.id} is not a task node"
        sequence_number = index + 1
        result.append(
            dataclasses.replace(
                node,
                data=dataclasses.replace(
                    data,
                    sequence_number=sequence_number,
                    previous_steps=tuple(reversed(steps)),
                ),
            )
        )
        steps.append(PreviousStep(node.id, data.label or "", sequence_number))
    return tuple(result)


def resequence_nodes(ordered_nodes: tuple[Node, ...]) -> tuple[Node, ...]:
    """Resequence the task nodes inside a full ordered node tuple.

    Start and end nodes are returned untouched and unnumbered, in place.
    """
    resequenced = iter(resequence(tuple(n for n in ordered_nodes if n.is_task)))
    return tuple(next(resequenced) if n.is_task else n for n in ordered_nodes)

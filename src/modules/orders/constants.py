"""Order stage machine.

Defines the closed set of order stages, the forward pipeline and the
legal transition table.  Pure module: no I/O, no ORM access.

Pipeline::

    PENDING_REVIEW -> COMPLIANCE_CHECK -> APPROVED -> ALLOCATED -> SETTLED

Every non-terminal stage has exactly two outbound edges: the next
pipeline stage, or ``REJECTED``.  ``SETTLED`` and ``REJECTED`` are
terminal and have none.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

from django.db import models


class OrderStage(models.TextChoices):
    PENDING_REVIEW = "PENDING_REVIEW", "Pending Review"
    COMPLIANCE_CHECK = "COMPLIANCE_CHECK", "Compliance Check"
    APPROVED = "APPROVED", "Approved"
    ALLOCATED = "ALLOCATED", "Allocated"
    SETTLED = "SETTLED", "Settled"
    REJECTED = "REJECTED", "Rejected"


INITIAL_STAGE = OrderStage.PENDING_REVIEW

PIPELINE_STAGES: Tuple[OrderStage, ...] = (
    OrderStage.PENDING_REVIEW,
    OrderStage.COMPLIANCE_CHECK,
    OrderStage.APPROVED,
    OrderStage.ALLOCATED,
    OrderStage.SETTLED,
)

TERMINAL_STAGES: FrozenSet[OrderStage] = frozenset(
    {OrderStage.SETTLED, OrderStage.REJECTED}
)

REJECTED_PIPELINE_INDEX = -1


def _build_transitions() -> Dict[OrderStage, FrozenSet[OrderStage]]:
    transitions: Dict[OrderStage, FrozenSet[OrderStage]] = {}
    for stage in OrderStage:
        if stage in TERMINAL_STAGES:
            transitions[stage] = frozenset()
            continue
        next_stage = PIPELINE_STAGES[PIPELINE_STAGES.index(stage) + 1]
        transitions[stage] = frozenset({next_stage, OrderStage.REJECTED})
    return transitions


VALID_TRANSITIONS: Dict[OrderStage, FrozenSet[OrderStage]] = _build_transitions()

if set(VALID_TRANSITIONS) != set(OrderStage):  # pragma: no cover
    raise RuntimeError("VALID_TRANSITIONS must cover every OrderStage.")


def is_valid_transition(from_stage: str, to_stage: str) -> bool:
    """Return ``True`` iff ``to_stage`` is a permitted edge from ``from_stage``.

    Raises ``ValueError`` for strings that are not an ``OrderStage``.
    """
    return OrderStage(to_stage) in VALID_TRANSITIONS[OrderStage(from_stage)]


def is_terminal_stage(stage: str) -> bool:
    return OrderStage(stage) in TERMINAL_STAGES


def pipeline_index(stage: str) -> int:
    """0-based position in the forward pipeline, ``-1`` for ``REJECTED``.

    Display only (progress bars); transition logic never uses it.
    """
    stage = OrderStage(stage)
    if stage == OrderStage.REJECTED:
        return REJECTED_PIPELINE_INDEX
    return PIPELINE_STAGES.index(stage)

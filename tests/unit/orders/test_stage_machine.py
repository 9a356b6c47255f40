"""Unit tests for the order stage machine.

Covers:
- The transition table shape (two edges per live stage, none when terminal).
- ``is_valid_transition`` for every pair of stages.
- Terminal detection and pipeline positions.
- Model-level helpers on ``Order``.
"""

from __future__ import annotations

import itertools

import pytest

from modules.orders.constants import (
    INITIAL_STAGE,
    PIPELINE_STAGES,
    TERMINAL_STAGES,
    VALID_TRANSITIONS,
    OrderStage,
    is_terminal_stage,
    is_valid_transition,
    pipeline_index,
)
from modules.orders.models import Order

pytestmark = pytest.mark.unit

FORWARD_EDGES = [
    (OrderStage.PENDING_REVIEW, OrderStage.COMPLIANCE_CHECK),
    (OrderStage.COMPLIANCE_CHECK, OrderStage.APPROVED),
    (OrderStage.APPROVED, OrderStage.ALLOCATED),
    (OrderStage.ALLOCATED, OrderStage.SETTLED),
]

REJECT_EDGES = [
    (stage, OrderStage.REJECTED)
    for stage in OrderStage
    if stage not in TERMINAL_STAGES
]

LEGAL_EDGES = set(FORWARD_EDGES) | set(REJECT_EDGES)


class TestTransitionTable:
    def test_covers_every_stage(self):
        assert set(VALID_TRANSITIONS) == set(OrderStage)

    def test_initial_stage_is_pending_review(self):
        assert INITIAL_STAGE == OrderStage.PENDING_REVIEW

    def test_pipeline_order(self):
        assert PIPELINE_STAGES == (
            OrderStage.PENDING_REVIEW,
            OrderStage.COMPLIANCE_CHECK,
            OrderStage.APPROVED,
            OrderStage.ALLOCATED,
            OrderStage.SETTLED,
        )

    def test_terminal_stages_have_no_edges(self):
        for stage in TERMINAL_STAGES:
            assert VALID_TRANSITIONS[stage] == frozenset()

    def test_live_stages_have_exactly_two_edges(self):
        for stage, targets in VALID_TRANSITIONS.items():
            if stage in TERMINAL_STAGES:
                continue
            assert len(targets) == 2
            assert OrderStage.REJECTED in targets


class TestIsValidTransition:
    @pytest.mark.parametrize("from_stage,to_stage", sorted(LEGAL_EDGES))
    def test_legal_edges(self, from_stage, to_stage):
        assert is_valid_transition(from_stage, to_stage) is True

    def test_everything_else_is_illegal(self):
        for from_stage, to_stage in itertools.product(OrderStage, repeat=2):
            if (from_stage, to_stage) in LEGAL_EDGES:
                continue
            assert is_valid_transition(from_stage, to_stage) is False, (
                f"{from_stage} -> {to_stage} should be illegal"
            )

    def test_skipping_a_stage_is_illegal(self):
        assert not is_valid_transition("PENDING_REVIEW", "APPROVED")

    def test_moving_backwards_is_illegal(self):
        assert not is_valid_transition("APPROVED", "COMPLIANCE_CHECK")

    def test_self_loop_is_illegal(self):
        assert not is_valid_transition("APPROVED", "APPROVED")

    def test_accepts_plain_strings(self):
        assert is_valid_transition("ALLOCATED", "SETTLED")

    def test_unknown_stage_raises(self):
        with pytest.raises(ValueError):
            is_valid_transition("PENDING_REVIEW", "SHIPPED")


class TestStageHelpers:
    @pytest.mark.parametrize(
        "stage,expected",
        [
            (OrderStage.PENDING_REVIEW, False),
            (OrderStage.COMPLIANCE_CHECK, False),
            (OrderStage.APPROVED, False),
            (OrderStage.ALLOCATED, False),
            (OrderStage.SETTLED, True),
            (OrderStage.REJECTED, True),
        ],
    )
    def test_is_terminal_stage(self, stage, expected):
        assert is_terminal_stage(stage) is expected

    @pytest.mark.parametrize(
        "stage,expected",
        [
            ("PENDING_REVIEW", 0),
            ("COMPLIANCE_CHECK", 1),
            ("APPROVED", 2),
            ("ALLOCATED", 3),
            ("SETTLED", 4),
            ("REJECTED", -1),
        ],
    )
    def test_pipeline_index(self, stage, expected):
        assert pipeline_index(stage) == expected


class TestOrderModelHelpers:
    def test_new_order_defaults_to_initial_stage(self):
        assert Order().stage == OrderStage.PENDING_REVIEW

    def test_can_transition_to(self):
        order = Order(stage=OrderStage.APPROVED)
        assert order.can_transition_to(OrderStage.ALLOCATED)
        assert order.can_transition_to(OrderStage.REJECTED)
        assert not order.can_transition_to(OrderStage.SETTLED)

    def test_is_terminal(self):
        assert Order(stage=OrderStage.SETTLED).is_terminal
        assert not Order(stage=OrderStage.ALLOCATED).is_terminal

    def test_pipeline_index_property(self):
        assert Order(stage=OrderStage.REJECTED).pipeline_index == -1
        assert Order(stage=OrderStage.COMPLIANCE_CHECK).pipeline_index == 1

"""Order service layer (Use Cases).

Orchestrates order placement and the stage pipeline.  All write
operations are atomic: the service defines the unit-of-work boundary,
and a failure at any step leaves inventory, orders and history exactly
as they were.

Business rules enforced:
- An order asks for at least one share of an open offer.
- Inventory never goes negative: placement is a compare-and-decrement
  on the locked offer row.
- ``total_cost`` snapshots the offer price at placement time.
- Stage changes follow ``VALID_TRANSITIONS`` only.
- Moving to ``ALLOCATED`` re-checks that the offer still covers the
  order (no second decrement).
- Every stage write appends exactly one history entry.
- Orders are only visible to, and movable by, their owner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import structlog
from django.db import transaction

from modules.offers.exceptions import OfferNotFound
from modules.orders.constants import INITIAL_STAGE, OrderStage, is_valid_transition
from modules.orders.events import OrderCreated, OrderStageChanged
from modules.orders.exceptions import (
    InsufficientShares,
    InvalidShareCount,
    InvalidStageTransition,
    OfferNotOpen,
    OrderNotFound,
)
from shared.infrastructure.bus import event_bus

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.offers.repositories.interfaces import IOfferRepository
    from modules.orders.dtos import AdvanceOrderStageDTO, CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        offer_repository: IOfferRepository,
        bus: Optional[IEventBus] = None,
    ) -> None:
        self._order_repo = order_repository
        self._offer_repo = offer_repository
        self._bus = bus or event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, user_id: Any, dto: CreateOrderDTO) -> Order:
        """Place an order and reserve its shares.

        Steps:
        1. Validate the share count.
        2. Lock the offer row (SELECT FOR UPDATE).
        3. Validate the offer is open and covers the request.
        4. Decrement inventory, insert the order, record initial history.

        Raises:
            InvalidShareCount: ``shares_requested`` is below one.
            OfferNotFound: the offer does not exist.
            OfferNotOpen: the offer is closed.
            InsufficientShares: not enough available shares.
        """
        log = logger.bind(user_id=str(user_id), offer_id=str(dto.offer_id))
        log.info("order.creation_started", shares_requested=dto.shares_requested)

        # 1. Validate share count
        if dto.shares_requested < 1:
            log.warning("order.rejected_share_count")
            raise InvalidShareCount("Shares requested must be at least 1.")

        # 2. Lock the offer row
        offer = self._offer_repo.get_for_update(str(dto.offer_id))
        if not offer:
            log.warning("order.rejected_offer_not_found")
            raise OfferNotFound()

        # 3. Business preconditions
        if not offer.is_open:
            log.warning("order.rejected_offer_not_open", status=offer.status)
            raise OfferNotOpen("Offer is not open.")
        if not offer.can_supply(dto.shares_requested):
            log.warning(
                "order.rejected_insufficient_shares",
                requested=dto.shares_requested,
                available=offer.available_shares,
            )
            raise InsufficientShares(
                f"Not enough available shares: requested {dto.shares_requested}, "
                f"available {offer.available_shares}."
            )

        # 4. Reserve inventory, persist order and its first history entry
        if not self._offer_repo.decrement_available(offer.id, dto.shares_requested):
            log.warning("order.rejected_decrement_lost")
            raise InsufficientShares(
                f"Not enough available shares: requested {dto.shares_requested}, "
                f"available {offer.available_shares}."
            )

        total_cost = offer.price_per_share * dto.shares_requested
        order = self._order_repo.create(
            user_id=user_id,
            offer_id=offer.id,
            shares_requested=dto.shares_requested,
            total_cost=total_cost,
        )
        self._order_repo.add_history(
            order_id=order.id,
            from_stage=None,
            to_stage=INITIAL_STAGE,
        )

        log.info(
            "order.created",
            order_id=str(order.id),
            total_cost=str(total_cost),
            remaining=offer.available_shares - dto.shares_requested,
        )
        self._bus.publish_on_commit(
            [
                OrderCreated(
                    aggregate_id=order.id,
                    user_id=order.user_id,
                    offer_id=offer.id,
                    shares_requested=order.shares_requested,
                )
            ]
        )
        return order

    @transaction.atomic
    def advance_order_stage(
        self,
        user_id: Any,
        order_id: str,
        dto: AdvanceOrderStageDTO,
    ) -> Order:
        """Move an owned order along one edge of the stage machine.

        Acquires a row-level lock on the order before validating the
        transition so concurrent advances serialize.

        Raises:
            OrderNotFound: order does not exist or belongs to another user.
            InvalidStageTransition: ``to_stage`` is not a legal edge.
            InsufficientShares: allocation re-check failed.
        """
        log = logger.bind(user_id=str(user_id), order_id=str(order_id))

        # 1. Lock the order row
        order = self._order_repo.get_for_update(str(order_id), user_id)
        if not order:
            log.warning("order.not_found")
            raise OrderNotFound()

        from_stage = order.stage
        to_stage = dto.to_stage
        log = log.bind(from_stage=str(from_stage), to_stage=str(to_stage))

        # 2. Validate FSM transition
        if not is_valid_transition(from_stage, to_stage):
            log.warning("order.invalid_transition")
            raise InvalidStageTransition(str(from_stage), str(to_stage))

        # 3. Allocation re-check on the locked offer row
        if to_stage == OrderStage.ALLOCATED:
            offer = self._offer_repo.get_for_update(str(order.offer_id))
            if offer is None or not offer.can_supply(order.shares_requested):
                log.warning(
                    "order.allocation_rejected",
                    requested=order.shares_requested,
                    available=offer.available_shares if offer else 0,
                )
                raise InsufficientShares(
                    "Not enough available shares for allocation."
                )

        # 4. Update stage and record history
        order.stage = to_stage
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            from_stage=from_stage,
            to_stage=to_stage,
            note=dto.note,
        )

        log.info("order.stage_advanced")
        self._bus.publish_on_commit(
            [
                OrderStageChanged(
                    aggregate_id=order.id,
                    from_stage=str(from_stage),
                    to_stage=str(to_stage),
                    note=dto.note,
                )
            ]
        )
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(self, user_id: Any, stage: Optional[str] = None) -> QuerySet[Order]:
        """Return the user's orders newest first, optionally for one stage."""
        orders = self._order_repo.list_for_user(user_id, stage=stage)
        logger.debug("order.listed", user_id=str(user_id), stage=stage)
        return orders

    @transaction.atomic
    def get_order_detail(self, user_id: Any, order_id: str) -> Order:
        """Retrieve an owned order with its offer and ascending history.

        Raises:
            OrderNotFound: order does not exist, the id is malformed, or the
                order belongs to another user.
        """
        order = self._order_repo.get_for_user(str(order_id), user_id)
        if not order:
            logger.warning("order.not_found", user_id=str(user_id), order_id=str(order_id))
            raise OrderNotFound()
        return order

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from modules.offers.models import Offer, OfferStatus
from modules.orders.constants import OrderStage
from modules.orders.models import Order, OrderStageHistory

SEED_USERS = [
    ("alice", "alice@example.com", "Alice", "Johnson", "alice12345"),
    ("bob", "bob@example.com", "Bob", "Smith", "bob12345"),
]

SEED_OFFERS = [
    # (ticker, company, sector, description, price, total, available, ipo_date)
    ("NTAI", "NovaTech AI", "Technology", "AI-powered enterprise solutions",
     Decimal("24.50"), 1_000_000, 750_000, date(2026, 3, 15)),
    ("GPLS", "GreenPulse Energy", "Clean Energy", "Renewable energy infrastructure",
     Decimal("18.75"), 2_000_000, 1_800_000, date(2026, 4, 1)),
    ("MVHT", "MedVault Health", "Healthcare", "Healthcare data management platform",
     Decimal("31.00"), 500_000, 420_000, date(2026, 3, 20)),
    ("QLDG", "QuantumLedger", "Fintech", "Blockchain-based financial services",
     Decimal("42.00"), 750_000, 600_000, date(2026, 5, 10)),
    ("ANST", "AeroNest Logistics", "Logistics", "Drone-based delivery logistics",
     Decimal("15.25"), 3_000_000, 2_500_000, date(2026, 4, 15)),
]

SEED_ORDERS = [
    # (ticker, shares, stage path, started N days ago)
    ("NTAI", 500, [OrderStage.PENDING_REVIEW, OrderStage.COMPLIANCE_CHECK,
                   OrderStage.APPROVED, OrderStage.ALLOCATED], 10),
    ("GPLS", 1000, [OrderStage.PENDING_REVIEW, OrderStage.COMPLIANCE_CHECK], 7),
    ("QLDG", 200, [OrderStage.PENDING_REVIEW], 3),
    ("MVHT", 300, [OrderStage.PENDING_REVIEW, OrderStage.COMPLIANCE_CHECK,
                   OrderStage.REJECTED], 8),
]


class Command(BaseCommand):
    help = "Seed database with sample investors, offers and orders."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        offers = self._seed_offers()
        orders_created = self._seed_orders(offers)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"offers={len(offers)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        for username, email, first_name, last_name, password in SEED_USERS:
            if User.objects.filter(username=username).exists():
                continue
            User.objects.create_user(
                username,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
            created += 1
        return created

    def _seed_offers(self) -> dict[str, Offer]:
        self.stdout.write("Creating offers...")
        offers: dict[str, Offer] = {}
        for ticker, company, sector, description, price, total, available, ipo in SEED_OFFERS:
            offer, _ = Offer.objects.get_or_create(
                ticker=ticker,
                defaults={
                    "company_name": company,
                    "sector": sector,
                    "description": description,
                    "price_per_share": price,
                    "total_shares": total,
                    "available_shares": available,
                    "status": OfferStatus.OPEN,
                    "ipo_date": ipo,
                },
            )
            offers[ticker] = offer
        self.stdout.write(self.style.SUCCESS("Creating offers... Done!"))
        return offers

    def _seed_orders(self, offers: dict[str, Offer]) -> int:
        self.stdout.write("Creating orders...")
        alice = get_user_model().objects.get(username="alice")
        if Order.objects.filter(user=alice).exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        for ticker, shares, stages, started in SEED_ORDERS:
            offer = offers[ticker]
            self._create_order_with_history(alice, offer, shares, stages, started)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return len(SEED_ORDERS)

    def _create_order_with_history(
        self,
        user,
        offer: Offer,
        shares: int,
        stages: Sequence[OrderStage],
        started_days_ago: int,
    ) -> Order:
        now = timezone.now()
        order = Order.objects.create(
            user=user,
            offer=offer,
            shares_requested=shares,
            total_cost=offer.price_per_share * shares,
            stage=stages[-1],
        )
        Order.objects.filter(id=order.id).update(
            created_at=now - timedelta(days=started_days_ago),
            updated_at=now - timedelta(days=started_days_ago - len(stages) + 1),
        )

        previous = None
        for offset, stage in enumerate(stages):
            OrderStageHistory.objects.create(
                order=order,
                from_stage=previous,
                to_stage=stage,
                changed_at=now - timedelta(days=started_days_ago - offset),
            )
            previous = stage
        return order

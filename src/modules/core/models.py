"""Base abstract models shared by the allocation modules.

Provides:
- ``BaseModel``: UUIDv7 primary key + created_at / updated_at timestamps.

UUIDv7 keys are time-ordered, so ``id`` doubles as a stable tie-breaker
when two rows share the same ``created_at`` (ordering is always
``created_at`` first, ``id`` second).

Nothing in this system is ever deleted (offers are closed, orders are
rejected, history is append-only), so there is no soft-delete layer.
"""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)

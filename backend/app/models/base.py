"""
VeggieFresh Admin API — Shared Model Columns
==============================================

What:  Mixins and column types shared by every table.
How:   `RecordMixin` adds the UUID primary key and UTC timestamps; `JSONDocument`
       stores embedded sub-documents (JSONB on PostgreSQL, JSON elsewhere).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

# Embedded lists/objects (price tiers, images, order items, addresses)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordMixin:
    """Primary key and audit timestamps, all generated Python-side."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # UTC with timezone; set on insert, bumped on every update
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

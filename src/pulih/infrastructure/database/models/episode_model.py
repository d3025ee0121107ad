"""
Journal Entry Database Model

SQLAlchemy ORM model for journal entry persistence.

PRIVACY: Free-text columns hold personal health notes. Entries are
deleted permanently on request; there is no soft delete.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulih.domain.models.episode import MAX_OCCURRED_AT_LENGTH, EpisodeRecord
from pulih.infrastructure.database.connection import Base


class EpisodeModel(Base):
    """
    Journal entry table ORM model.

    ``occurred_at`` keeps the ISO 8601 string exactly as entered so
    month selection can match on its prefix.

    Table: journal_entries
    """

    __tablename__ = "journal_entries"

    id: Mapped[UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
        doc="Unique entry identifier"
    )

    owner_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Owning user ID"
    )

    occurred_at: Mapped[str] = mapped_column(
        String(MAX_OCCURRED_AT_LENGTH),
        nullable=False,
        index=True,
        doc="When the episode happened (ISO 8601)"
    )

    triggers: Mapped[str] = mapped_column(Text, default="", nullable=False, doc="Delimited trigger tags")
    symptoms: Mapped[str] = mapped_column(Text, default="", nullable=False, doc="Delimited symptom tags")
    strategies: Mapped[str] = mapped_column(Text, default="", nullable=False, doc="Delimited strategy tags")
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False, doc="Free-form notes")

    condition: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        doc="Outcome (0 still anxious, 1 improved, 2 calm)"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=func.now(),
        nullable=False,
        doc="When the entry was first saved"
    )

    owner = relationship("UserModel", back_populates="episodes")

    def __repr__(self) -> str:
        return f"<EpisodeModel(id={self.id}, occurred_at='{self.occurred_at}', condition={self.condition})>"

    def to_domain(self) -> EpisodeRecord:
        return EpisodeRecord(
            id=self.id,
            owner_id=self.owner_id,
            occurred_at=self.occurred_at,
            triggers=self.triggers,
            symptoms=self.symptoms,
            strategies=self.strategies,
            notes=self.notes,
            condition=self.condition,
            created_at=self.created_at,
        )

    @classmethod
    def from_domain(cls, record: EpisodeRecord) -> "EpisodeModel":
        return cls(
            id=record.id,
            owner_id=record.owner_id,
            occurred_at=record.occurred_at,
            triggers=record.triggers,
            symptoms=record.symptoms,
            strategies=record.strategies,
            notes=record.notes,
            condition=int(record.condition),
            created_at=record.created_at,
        )

    def apply(self, record: EpisodeRecord) -> None:
        """Copy editable fields from a record."""
        self.occurred_at = record.occurred_at
        self.triggers = record.triggers
        self.symptoms = record.symptoms
        self.strategies = record.strategies
        self.notes = record.notes
        self.condition = int(record.condition)

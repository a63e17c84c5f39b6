import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class InjuryHypothesis(Base):
    """
    Versioned, per-user structured guess at an injury's cause.
    Written by the orchestrator; the summarizer always reads the most recently updated row.
    """

    __tablename__ = "injury_hypothesis"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)

    # Strictly increasing per user: previous max + 1, starting at 1.
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # JSON strings for SQLite MVP
    subjective_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    differentials_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    status: Mapped[str] = mapped_column(String, nullable=False, default="active")  # "active" | "archived"

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, index=True)


class SymptomAssessment(Base):
    """Result of the free-text symptom assessment form (templated, not versioned)."""

    __tablename__ = "injury_hypotheses"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)

    symptoms: Mapped[str] = mapped_column(Text, nullable=False)
    hypothesis: Mapped[str] = mapped_column(Text, nullable=False)
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False)  # 0-10

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

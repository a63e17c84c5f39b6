import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class WorkoutPlan(Base):
    __tablename__ = "workout_plan"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)
    linked_hypothesis: Mapped[str | None] = mapped_column(
        String, ForeignKey("injury_hypothesis.id"), index=True, nullable=True
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    mesocycle_weeks: Mapped[int] = mapped_column(Integer, nullable=False, default=6)

    # Ordered week blocks -> sessions -> exercises (JSON string for SQLite MVP)
    microcycles_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    progression_logic: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, index=True)


class CustomWorkoutPlan(Base):
    """User-built plan from the "create workout plan" form: a named list of exercises by difficulty."""

    __tablename__ = "workout_plans"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)
    injury_hypothesis_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("injury_hypotheses.id"), nullable=True
    )

    plan_name: Mapped[str] = mapped_column(String, nullable=False)
    exercises_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    duration_weeks: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty_level: Mapped[str] = mapped_column(String, nullable=False)  # beginner | intermediate | advanced

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class SessionLog(Base):
    __tablename__ = "session_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)
    plan_id: Mapped[str] = mapped_column(String, ForeignKey("workout_plan.id"), index=True, nullable=False)

    performed_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    # Pain / RPE are written as {"overall": n}; older rows may hold a bare number.
    # Always read through services.scales.coerce_overall.
    pain_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    rpe_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercises_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    adherence: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-100
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class CheckIn(Base):
    __tablename__ = "check_ins"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)
    workout_plan_id: Mapped[str | None] = mapped_column(String, ForeignKey("workout_plans.id"), nullable=True)

    pain_level: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-10
    mobility_score: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-10
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_exercises_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

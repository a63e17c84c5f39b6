from pydantic import BaseModel, Field

from schemas.hypothesis import Differential


class HypothesisSummary(BaseModel):
    id: str
    version: int
    differentials: list[Differential] = Field(default_factory=list)
    key_findings: str | None = None  # condensed subjective, <= 240 chars


class PlanSummary(BaseModel):
    id: str
    version: int
    linked_hypothesis: str | None = None
    mesocycle_weeks: int
    current_week: int  # 1-based
    next_session_preview: str | None = None
    rules: str | None = None


class SessionMini(BaseModel):
    id: str
    performed_at: str
    pain: int | float | None = None  # overall 0..10
    rpe: int | float | None = None  # overall 0..10
    notes: str | None = None


class RecentLogBundle(BaseModel):
    logs: list[SessionMini] = Field(default_factory=list)
    median_pain: float | None = None
    median_rpe: float | None = None


class AgentContext(BaseModel):
    hypothesis: HypothesisSummary | None = None
    plan: PlanSummary | None = None
    logs: RecentLogBundle = Field(default_factory=RecentLogBundle)

from pydantic import BaseModel, Field


class CheckInCreate(BaseModel):
    pain_level: int = Field(..., ge=1, le=10)
    mobility_score: int = Field(..., ge=1, le=10)
    notes: str | None = Field(None, max_length=4000)
    workout_plan_id: str | None = None
    completed_exercises: list[str] = Field(default_factory=list)


class CheckInItem(BaseModel):
    id: str
    created_at: str
    pain_level: int
    mobility_score: int
    notes: str | None = None
    workout_plan_id: str | None = None
    plan_name: str | None = None
    completed_exercises: list[str] | None = None


class CheckInListResponse(BaseModel):
    check_ins: list[CheckInItem]

from pydantic import BaseModel, Field


class Exercise(BaseModel):
    name: str
    sets: int
    reps: str
    rpe: int | str  # target effort: RPE number or a descriptor like "comfortable"
    notes: str | None = None


class SessionBlock(BaseModel):
    day: str
    exercises: list[Exercise] = Field(..., min_length=1)


class Microcycle(BaseModel):
    week: int = Field(..., ge=1)
    sessions: list[SessionBlock] = Field(..., min_length=1)


class PlanTemplate(BaseModel):
    microcycles: list[Microcycle] = Field(..., min_length=1)
    progression_logic: str
    mesocycle_weeks: int
    version: int


class WorkoutPlanOut(BaseModel):
    id: str
    version: int
    linked_hypothesis: str | None
    mesocycle_weeks: int
    microcycles: list[Microcycle]
    progression_logic: str | None
    created_at: str
    updated_at: str


class WorkoutPlanListResponse(BaseModel):
    plans: list[WorkoutPlanOut]


class SessionLogOut(BaseModel):
    id: str
    plan_id: str
    performed_at: str
    pain: int | float | None = None
    rpe: int | float | None = None
    notes: str | None = None


class SessionLogListResponse(BaseModel):
    plan_id: str | None
    logs: list[SessionLogOut]


class CustomExercise(BaseModel):
    name: str
    sets: int
    reps: str
    instructions: str
    duration: str | None = None


class CustomPlanCreate(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=200)
    duration_weeks: int = Field(..., ge=1, le=52)
    difficulty_level: str = Field(..., min_length=1, max_length=40)
    injury_hypothesis_id: str | None = None


class CustomPlanItem(BaseModel):
    id: str
    plan_name: str
    duration_weeks: int
    difficulty_level: str
    injury_hypothesis_id: str | None
    exercises: list[CustomExercise]
    created_at: str


class CustomPlanListResponse(BaseModel):
    plans: list[CustomPlanItem]

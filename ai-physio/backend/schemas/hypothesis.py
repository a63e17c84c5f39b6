from pydantic import BaseModel, ConfigDict, Field


class Subjective(BaseModel):
    """Free-text symptom report plus optional structured fields. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    narrative: str
    onset: str | None = None
    location: str | None = None
    aggravators: list[str] = Field(default_factory=list)
    easers: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)


class Differential(BaseModel):
    code: str
    confidence: float = Field(..., ge=0, le=1)


class HypothesisOut(BaseModel):
    id: str
    version: int
    subjective: Subjective
    differentials: list[Differential]
    status: str
    created_at: str
    updated_at: str


class HypothesisListResponse(BaseModel):
    hypotheses: list[HypothesisOut]


class AssessmentCreate(BaseModel):
    symptoms: str = Field(..., min_length=1, max_length=4000)


class AssessmentItem(BaseModel):
    id: str
    symptoms: str
    hypothesis: str
    confidence_score: int  # 0-10
    created_at: str


class AssessmentListResponse(BaseModel):
    assessments: list[AssessmentItem]

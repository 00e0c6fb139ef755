from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class EvaluationReportCreate(BaseModel):
    recipe_id: int
    persona: str = "nutritionist"


class EvaluationReportRead(BaseModel):
    id: int
    recipe_id: int
    persona: str
    content: str
    thread_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

from typing import Optional
from pydantic import BaseModel, Field

from sheetsql.schemas.session_state import SessionState


class AskRequest(BaseModel):
    question: str = Field(..., description="Natural-language question about the uploaded sheet")


class QueryRequest(BaseModel):
    sql: str = Field(..., description="SQLite statement to run against user_data")


class AskResponse(BaseModel):
    sql: Optional[str] = None
    stale: bool = Field(False, description="A newer request superseded this one; nothing was applied")
    state: SessionState

"""Comment schemas."""

from typing import List, Optional

from pydantic import BaseModel, RootModel

from rankings.schemas.common import UTCDateTime


class CommentRequest(BaseModel):
    """Comment submission body."""
    company_id: int
    content: str
    is_current_employee: bool = False
    session_id: Optional[str] = None


class CommentResponse(BaseModel):
    """A stored comment."""
    id: int
    company_id: int
    content: str
    is_current_employee: bool = False
    session_id: Optional[str] = None
    upvotes: int = 0
    created_at: UTCDateTime

    class Config:
        from_attributes = True


class CommentListResponse(RootModel[List[CommentResponse]]):
    """Comments ordered by upvotes, newest first within ties."""

# marketplace/schemas/comment_schemas.py

from pydantic import Field
from typing import List, Optional

from marketplace.schemas.user_schemas import CamelModel

class CommentView(CamelModel):
    """Comment keyed by numeric author id; created_at is epoch milliseconds (UTC)."""
    author: int
    author_image: Optional[str] = None
    author_first_name: str
    created_at: int
    pk: int
    text: str

class Comments(CamelModel):
    count: int
    results: List[CommentView]

class CreateOrUpdateComment(CamelModel):
    text: str = Field(min_length=8, max_length=64)

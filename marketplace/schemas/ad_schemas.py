# marketplace/schemas/ad_schemas.py

from pydantic import Field
from typing import List, Optional

from marketplace.schemas.user_schemas import CamelModel

class AdView(CamelModel):
    pk: int
    author: int
    image: Optional[str] = None
    price: int
    title: str

class Ads(CamelModel):
    count: int
    results: List[AdView]

class ExtendedAd(CamelModel):
    pk: int
    author_first_name: str
    author_last_name: str
    description: str
    email: str
    image: Optional[str] = None
    phone: str
    price: int
    title: str

class CreateOrUpdateAd(CamelModel):
    title: str = Field(min_length=4, max_length=32)
    price: int = Field(ge=0, le=10_000_000)
    description: str = Field(min_length=8, max_length=64)

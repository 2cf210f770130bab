"""
Pydantic schemas for catalog talks.

A talk is a flat, read‑only record describing one recorded
presentation.  Dates are kept as the strings found in the dataset.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class TalkRead(BaseModel):
    talk_id: int = Field(..., examples=[66])
    title: str = Field(..., examples=["Do schools kill creativity?"])
    speaker: str = Field(..., examples=["Sir Ken Robinson"])
    recorded_date: Optional[str] = Field(None, examples=["2006-02-25"])
    published_date: Optional[str] = Field(None, examples=["2006-06-27"])
    event: Optional[str] = Field(None, examples=["TED2006"])
    duration: Optional[int] = Field(None, description="Length in seconds")
    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)


class TalkListResponse(BaseModel):
    success: bool = True
    body: List[TalkRead]


class TalkResponse(BaseModel):
    success: bool = True
    body: TalkRead

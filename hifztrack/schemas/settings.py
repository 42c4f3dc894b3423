"""
Settings schema for hifztrack.

Page geometry of the printed text and the repetition count a task requires.
"""

from pydantic import BaseModel, ConfigDict, Field


class MemorizationSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Page 1 is printed as 7 lines in the Medina layout; some sources count 5
    first_page_lines: int = Field(default=7, ge=1, le=15)
    second_page_lines: int = Field(default=6, ge=1, le=15)
    standard_page_lines: int = Field(default=15, ge=8)
    total_pages: int = Field(default=602, ge=3)
    repetition_count: int = Field(default=80, ge=1)  # passes required per task

"""
Progression schemas for hifztrack.

Defines the closed sets and Pydantic models used by the progression engine:
- Stages of memorizing a page and group proficiency levels
- Line ranges and (page, line) positions
- Task counter snapshots and progression decisions
"""

from pydantic import BaseModel, Field, computed_field
from typing import Optional, Union
from enum import Enum


class Stage(str, Enum):
    STAGE_1_1 = "STAGE_1_1"   # lines 1-7 one batch at a time
    STAGE_1_2 = "STAGE_1_2"   # lines 1-7 together
    STAGE_2_1 = "STAGE_2_1"   # lines 8-15 one batch at a time
    STAGE_2_2 = "STAGE_2_2"   # lines 8-15 together
    STAGE_3 = "STAGE_3"       # whole page


class GroupLevel(str, Enum):
    LEVEL_1 = "LEVEL_1"
    LEVEL_2 = "LEVEL_2"
    LEVEL_3 = "LEVEL_3"


class StageKind(str, Enum):
    """How a stage is submitted."""
    LEARNING = "learning"       # individual lines, in batches
    CONNECTION = "connection"   # a half page recited as one unit
    FULL_PAGE = "full_page"     # the whole page recited as one unit


class DecisionKind(str, Enum):
    AWAIT_SUBMISSIONS = "await_submissions"
    NEXT_STAGE = "next_stage"
    NEXT_PAGE = "next_page"
    RETRY = "retry"
    CORPUS_COMPLETE = "corpus_complete"


# Stages and levels arrive from the persistence layer as plain strings
StageLike = Union[Stage, str]
LevelLike = Union[GroupLevel, str]


# -----------------------------------------------------------------------------
# Constant tables
# -----------------------------------------------------------------------------

LINES_PER_BATCH = {
    GroupLevel.LEVEL_1: 1,
    GroupLevel.LEVEL_2: 3,
    GroupLevel.LEVEL_3: 7,
}


class StageInfo(BaseModel):
    """Display metadata for a stage."""
    stage: Stage
    title: str
    description: str
    kind: StageKind

    @computed_field
    @property
    def is_learning(self) -> bool:
        return self.kind == StageKind.LEARNING

    @computed_field
    @property
    def is_repetition(self) -> bool:
        """Submitted as one unit, repeated the task's required count."""
        return self.kind != StageKind.LEARNING


STAGE_INFO = {
    Stage.STAGE_1_1: StageInfo(
        stage=Stage.STAGE_1_1,
        title="Stage 1.1: learn lines 1-7",
        description="Learn lines 1-7 one batch at a time",
        kind=StageKind.LEARNING,
    ),
    Stage.STAGE_1_2: StageInfo(
        stage=Stage.STAGE_1_2,
        title="Stage 1.2: connect lines 1-7",
        description="Recite lines 1-7 together",
        kind=StageKind.CONNECTION,
    ),
    Stage.STAGE_2_1: StageInfo(
        stage=Stage.STAGE_2_1,
        title="Stage 2.1: learn lines 8-15",
        description="Learn lines 8-15 one batch at a time",
        kind=StageKind.LEARNING,
    ),
    Stage.STAGE_2_2: StageInfo(
        stage=Stage.STAGE_2_2,
        title="Stage 2.2: connect lines 8-15",
        description="Recite lines 8-15 together",
        kind=StageKind.CONNECTION,
    ),
    Stage.STAGE_3: StageInfo(
        stage=Stage.STAGE_3,
        title="Stage 3: whole page",
        description="Recite the whole page as one unit",
        kind=StageKind.FULL_PAGE,
    ),
}


def coerce_stage(value: Optional[StageLike]) -> Optional[Stage]:
    """Map a stage or its string value to a Stage; None when unrecognized."""
    if isinstance(value, Stage):
        return value
    try:
        return Stage(value)
    except ValueError:
        return None


def coerce_level(value: Optional[LevelLike]) -> Optional[GroupLevel]:
    """Map a level or its string value to a GroupLevel; None when unrecognized."""
    if isinstance(value, GroupLevel):
        return value
    try:
        return GroupLevel(value)
    except ValueError:
        return None


# -----------------------------------------------------------------------------
# Positions and ranges
# -----------------------------------------------------------------------------

class LineRange(BaseModel):
    """Inclusive, 1-based range of lines on one page."""
    start_line: int
    end_line: int

    @computed_field
    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def as_tuple(self) -> tuple[int, int]:
        return (self.start_line, self.end_line)


class LinePosition(BaseModel):
    page: int
    line: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.page, self.line)


# -----------------------------------------------------------------------------
# Counters and decisions
# -----------------------------------------------------------------------------

class ProgressSnapshot(BaseModel):
    """
    Task counters as read from storage at one point in time.

    Counters are not range-checked here: callers validate before calling in.
    """
    passed_count: int
    failed_count: int
    required_count: int
    current_stage: StageLike
    current_page: int
    current_line: int = 1

    @computed_field
    @property
    def total_submitted(self) -> int:
        return self.passed_count + self.failed_count


class ProgressDecision(BaseModel):
    """
    Outcome of evaluating a snapshot.

    - next_page is only set when crossing a page boundary
    - remaining_count is 0 whenever should_progress is true
    """
    kind: DecisionKind
    should_progress: bool
    next_stage: Optional[Stage] = None
    next_page: Optional[int] = None
    remaining_count: int = 0

    @computed_field
    @property
    def corpus_complete(self) -> bool:
        return self.kind == DecisionKind.CORPUS_COMPLETE


class PositionUpdate(BaseModel):
    """Where the student stands after the current unit of work passed."""
    page: int
    line: int
    stage: Stage
    corpus_complete: bool = False


class TaskPlan(BaseModel):
    """Next unit of work for a student: one line range, repeated required_count times."""
    page: int
    stage: Stage
    start_line: int = Field(..., ge=1)
    end_line: int = Field(..., ge=1)
    required_count: int = Field(..., ge=1)

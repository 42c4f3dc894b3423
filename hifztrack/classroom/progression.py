"""
ProgressionEngine - Stage sequencing and the pass/fail decision rule.

Provides:
- Ordered stage sequence for a page (two stages for short pages, five otherwise)
- Line range covered by each stage and the learning batch inside it
- Decision from task counters: wait, retry, next stage, next page
- The student's next position and next task after a passed unit

The engine owns no state. Callers read counters, ask for a decision and
persist the result inside their own transaction.
"""

import logging
from typing import Optional

from hifztrack.schemas import (
    Stage,
    StageKind,
    StageInfo,
    StageLike,
    LevelLike,
    DecisionKind,
    LineRange,
    ProgressSnapshot,
    ProgressDecision,
    PositionUpdate,
    TaskPlan,
    MemorizationSettings,
    LINES_PER_BATCH,
    STAGE_INFO,
    coerce_stage,
    coerce_level,
)

from .geometry import PageGeometry


logger = logging.getLogger(__name__)

# Pages with at most this many lines are learned in one block
SIMPLE_PAGE_MAX_LINES = 7
# Last line of the first block on a full page
FIRST_BLOCK_END_LINE = 7
DEFAULT_BATCH_SIZE = 1

FULL_STAGE_SEQUENCE = (
    Stage.STAGE_1_1,
    Stage.STAGE_1_2,
    Stage.STAGE_2_1,
    Stage.STAGE_2_2,
    Stage.STAGE_3,
)

SIMPLE_STAGE_SEQUENCE = (
    Stage.STAGE_1_1,
    Stage.STAGE_3,
)

LEARNING_STAGES = frozenset(
    stage for stage, info in STAGE_INFO.items() if info.kind == StageKind.LEARNING
)


def lines_per_batch(level: LevelLike) -> int:
    """Lines introduced at once for a group level; unknown levels get 1."""
    resolved = coerce_level(level)
    if resolved is None:
        logger.warning("Unknown group level %r, using batch of %d", level, DEFAULT_BATCH_SIZE)
        return DEFAULT_BATCH_SIZE
    return LINES_PER_BATCH[resolved]


def is_learning_stage(stage: StageLike) -> bool:
    """True for the stages where lines are learned in batches."""
    return coerce_stage(stage) in LEARNING_STAGES


def stage_info(stage: StageLike) -> Optional[StageInfo]:
    resolved = coerce_stage(stage)
    return STAGE_INFO[resolved] if resolved else None


def stage_kind(stage: StageLike) -> Optional[StageKind]:
    info = stage_info(stage)
    return info.kind if info else None


class ProgressionEngine:
    """
    Stage state machine over a page layout.

    The stage sequence of a page is the single definition of valid
    transitions; every other method derives from it.
    """

    def __init__(
        self,
        geometry: Optional[PageGeometry] = None,
        settings: Optional[MemorizationSettings] = None,
    ):
        """
        Initialize engine.

        Args:
            geometry: Page layout (default: built from settings)
            settings: Memorization settings (default: geometry's settings)
        """
        if geometry is None:
            geometry = PageGeometry(settings)
        self.geometry = geometry
        self.settings = settings or geometry.settings

    @property
    def total_pages(self) -> int:
        return self.geometry.total_pages

    def is_simple_page(self, page: int) -> bool:
        """Short pages skip the connection stages and the second block."""
        return self.geometry.line_count_for_page(page) <= SIMPLE_PAGE_MAX_LINES

    # -------------------------------------------------------------------------
    # Stage sequence
    # -------------------------------------------------------------------------

    def stage_sequence_for_page(self, page: int) -> tuple[Stage, ...]:
        if self.is_simple_page(page):
            return SIMPLE_STAGE_SEQUENCE
        return FULL_STAGE_SEQUENCE

    def first_stage(self, page: int) -> Stage:
        return self.stage_sequence_for_page(page)[0]

    def next_stage(self, stage: StageLike, page: int) -> Optional[Stage]:
        """
        Stage following `stage` on the same page.

        Returns None after the last stage, and also for a stage that is not
        part of the page's sequence; both mean "move to the next page".
        """
        sequence = self.stage_sequence_for_page(page)
        resolved = coerce_stage(stage)
        if resolved not in sequence:
            if resolved is None:
                logger.warning("Unknown stage %r on page %d", stage, page)
            return None

        index = sequence.index(resolved)
        if index >= len(sequence) - 1:
            return None
        return sequence[index + 1]

    # -------------------------------------------------------------------------
    # Line ranges
    # -------------------------------------------------------------------------

    def line_range_for_stage(self, stage: StageLike, page: int) -> LineRange:
        """Lines a stage covers on a page, independent of group level."""
        line_count = self.geometry.line_count_for_page(page)
        if line_count <= SIMPLE_PAGE_MAX_LINES:
            return LineRange(start_line=1, end_line=line_count)

        resolved = coerce_stage(stage)
        if resolved in (Stage.STAGE_1_1, Stage.STAGE_1_2):
            return LineRange(start_line=1, end_line=min(FIRST_BLOCK_END_LINE, line_count))
        if resolved in (Stage.STAGE_2_1, Stage.STAGE_2_2):
            return LineRange(start_line=FIRST_BLOCK_END_LINE + 1, end_line=line_count)
        return LineRange(start_line=1, end_line=line_count)

    def current_learning_range(
        self,
        stage: StageLike,
        current_line: int,
        level: LevelLike,
        page: int,
    ) -> LineRange:
        """
        Lines to submit next.

        Learning stages hand out one batch starting at current_line, cut off
        at the end of the stage. Other stages are submitted whole.
        A current_line outside the stage is moved into the stage's range
        first, so STAGE_2_1 at line 1 starts at line 8.
        """
        stage_range = self.line_range_for_stage(stage, page)
        if not is_learning_stage(stage):
            return stage_range

        start = min(max(current_line, stage_range.start_line), stage_range.end_line)
        end = min(start + lines_per_batch(level) - 1, stage_range.end_line)
        return LineRange(start_line=start, end_line=end)

    # -------------------------------------------------------------------------
    # Decisions
    # -------------------------------------------------------------------------

    def evaluate_progress(
        self,
        passed_count: int,
        failed_count: int,
        required_count: int,
        current_stage: StageLike,
        current_page: int,
    ) -> ProgressDecision:
        """
        Decide what happens to a task given its counters.

        - fewer submissions than required: wait for the rest
        - all required submissions passed: next stage, or next page
        - otherwise: resubmit the failed ones
        """
        total_submitted = passed_count + failed_count

        if total_submitted < required_count:
            decision = ProgressDecision(
                kind=DecisionKind.AWAIT_SUBMISSIONS,
                should_progress=False,
                remaining_count=required_count - total_submitted,
            )
        elif passed_count >= required_count and failed_count == 0:
            decision = self._clean_pass(current_stage, current_page)
        else:
            decision = ProgressDecision(
                kind=DecisionKind.RETRY,
                should_progress=False,
                remaining_count=max(failed_count, 0),
            )

        logger.debug(
            "Page %s %s: passed=%s failed=%s required=%s -> %s",
            current_page, current_stage, passed_count, failed_count,
            required_count, decision.kind.value,
        )
        return decision

    def evaluate_snapshot(self, snapshot: ProgressSnapshot) -> ProgressDecision:
        return self.evaluate_progress(
            snapshot.passed_count,
            snapshot.failed_count,
            snapshot.required_count,
            snapshot.current_stage,
            snapshot.current_page,
        )

    def _clean_pass(self, stage: StageLike, page: int) -> ProgressDecision:
        following = self.next_stage(stage, page)
        if following is not None:
            return ProgressDecision(
                kind=DecisionKind.NEXT_STAGE,
                should_progress=True,
                next_stage=following,
            )

        if page >= self.total_pages:
            logger.info("Final page %d passed, corpus complete", page)
            return ProgressDecision(
                kind=DecisionKind.CORPUS_COMPLETE,
                should_progress=False,
            )

        next_page = page + 1
        return ProgressDecision(
            kind=DecisionKind.NEXT_PAGE,
            should_progress=True,
            next_stage=self.first_stage(next_page),
            next_page=next_page,
        )

    # -------------------------------------------------------------------------
    # Position and task planning
    # -------------------------------------------------------------------------

    def advance_position(
        self,
        stage: StageLike,
        current_line: int,
        level: LevelLike,
        page: int,
    ) -> PositionUpdate:
        """
        Student position after the current unit passed.

        Inside a learning stage the student moves to the line after the
        batch. Once a stage's lines are exhausted the student moves to the
        first line of the next stage, then to line 1 of the next page.
        """
        resolved = coerce_stage(stage)

        if is_learning_stage(stage):
            batch = self.current_learning_range(stage, current_line, level, page)
            stage_end = self.line_range_for_stage(stage, page).end_line
            if batch.end_line < stage_end:
                return PositionUpdate(page=page, line=batch.end_line + 1, stage=resolved)

        following = self.next_stage(stage, page)
        if following is not None:
            start = self.line_range_for_stage(following, page).start_line
            return PositionUpdate(page=page, line=start, stage=following)

        if page >= self.total_pages:
            return PositionUpdate(
                page=page,
                line=current_line,
                stage=resolved or self.stage_sequence_for_page(page)[-1],
                corpus_complete=True,
            )

        return PositionUpdate(page=page + 1, line=1, stage=self.first_stage(page + 1))

    def plan_task(
        self,
        stage: StageLike,
        current_line: int,
        level: LevelLike,
        page: int,
    ) -> TaskPlan:
        """Next unit of work at the student's position."""
        resolved = coerce_stage(stage) or self.first_stage(page)
        lines = self.current_learning_range(resolved, current_line, level, page)
        return TaskPlan(
            page=page,
            stage=resolved,
            start_line=lines.start_line,
            end_line=lines.end_line,
            required_count=self.settings.repetition_count,
        )


DEFAULT_ENGINE = ProgressionEngine()


def stage_sequence_for_page(page: int) -> tuple[Stage, ...]:
    return DEFAULT_ENGINE.stage_sequence_for_page(page)


def next_stage(stage: StageLike, page: int) -> Optional[Stage]:
    return DEFAULT_ENGINE.next_stage(stage, page)


def line_range_for_stage(stage: StageLike, page: int) -> LineRange:
    return DEFAULT_ENGINE.line_range_for_stage(stage, page)


def current_learning_range(
    stage: StageLike, current_line: int, level: LevelLike, page: int
) -> LineRange:
    return DEFAULT_ENGINE.current_learning_range(stage, current_line, level, page)


def evaluate_progress(
    passed_count: int,
    failed_count: int,
    required_count: int,
    current_stage: StageLike,
    current_page: int,
) -> ProgressDecision:
    return DEFAULT_ENGINE.evaluate_progress(
        passed_count, failed_count, required_count, current_stage, current_page
    )

"""
Schema validation tests for hifztrack.

Tests the Pydantic models and closed sets used by the progression engine.
"""

import pytest

from hifztrack.schemas import (
    # Progress
    Stage,
    GroupLevel,
    StageKind,
    DecisionKind,
    LINES_PER_BATCH,
    STAGE_INFO,
    coerce_stage,
    coerce_level,
    LineRange,
    LinePosition,
    ProgressSnapshot,
    ProgressDecision,
    PositionUpdate,
    TaskPlan,
    # Settings
    MemorizationSettings,
)


class TestClosedSets:
    """Test stage and level enums."""

    def test_stage_values_match_names(self):
        for stage in Stage:
            assert stage.value == stage.name

    def test_stage_from_string(self):
        assert Stage("STAGE_2_1") == Stage.STAGE_2_1
        assert Stage.STAGE_3 == "STAGE_3"

    def test_batch_sizes_cover_every_level(self):
        assert set(LINES_PER_BATCH) == set(GroupLevel)
        assert [LINES_PER_BATCH[lv] for lv in GroupLevel] == [1, 3, 7]

    def test_stage_info_covers_every_stage(self):
        assert set(STAGE_INFO) == set(Stage)
        for stage, info in STAGE_INFO.items():
            assert info.stage == stage

    def test_learning_flags(self):
        learning = {s for s, info in STAGE_INFO.items() if info.is_learning}
        assert learning == {Stage.STAGE_1_1, Stage.STAGE_2_1}
        assert STAGE_INFO[Stage.STAGE_3].kind == StageKind.FULL_PAGE

    def test_repetition_flags(self):
        repetition = {s for s, info in STAGE_INFO.items() if info.is_repetition}
        assert repetition == {Stage.STAGE_1_2, Stage.STAGE_2_2, Stage.STAGE_3}
        assert STAGE_INFO[Stage.STAGE_1_2].model_dump()["is_repetition"] is True


class TestCoercion:
    """Test string-to-enum coercion helpers."""

    def test_coerce_known_stage(self):
        assert coerce_stage("STAGE_1_2") is Stage.STAGE_1_2
        assert coerce_stage(Stage.STAGE_3) is Stage.STAGE_3

    def test_coerce_unknown_stage(self):
        assert coerce_stage("STAGE_9") is None
        assert coerce_stage(None) is None
        assert coerce_stage(42) is None

    def test_coerce_level(self):
        assert coerce_level("LEVEL_3") is GroupLevel.LEVEL_3
        assert coerce_level("expert") is None


class TestRangeSchemas:
    """Test line ranges and positions."""

    def test_line_range_count(self):
        lines = LineRange(start_line=8, end_line=15)
        assert lines.line_count == 8
        assert lines.as_tuple() == (8, 15)

    def test_single_line_range(self):
        assert LineRange(start_line=3, end_line=3).line_count == 1

    def test_line_position(self):
        pos = LinePosition(page=4, line=15)
        assert pos.as_tuple() == (4, 15)


class TestProgressSchemas:
    """Test snapshots, decisions and plans."""

    def test_snapshot_total(self):
        snapshot = ProgressSnapshot(
            passed_count=2,
            failed_count=1,
            required_count=3,
            current_stage=Stage.STAGE_1_1,
            current_page=5,
        )
        assert snapshot.total_submitted == 3
        assert snapshot.current_line == 1

    def test_snapshot_accepts_unknown_stage_string(self):
        snapshot = ProgressSnapshot(
            passed_count=0,
            failed_count=0,
            required_count=1,
            current_stage="LEGACY_STAGE",
            current_page=5,
        )
        assert snapshot.current_stage == "LEGACY_STAGE"

    def test_snapshot_does_not_reject_negative_counters(self):
        snapshot = ProgressSnapshot(
            passed_count=-1,
            failed_count=0,
            required_count=0,
            current_stage=Stage.STAGE_3,
            current_page=1,
        )
        assert snapshot.total_submitted == -1

    def test_decision_defaults(self):
        decision = ProgressDecision(kind=DecisionKind.RETRY, should_progress=False, remaining_count=2)
        assert decision.next_stage is None
        assert decision.next_page is None
        assert decision.corpus_complete is False

    def test_corpus_complete_flag(self):
        decision = ProgressDecision(kind=DecisionKind.CORPUS_COMPLETE, should_progress=False)
        assert decision.corpus_complete is True
        assert decision.model_dump()["corpus_complete"] is True

    def test_decision_json_dump(self):
        decision = ProgressDecision(
            kind=DecisionKind.NEXT_PAGE,
            should_progress=True,
            next_stage=Stage.STAGE_1_1,
            next_page=6,
        )
        dumped = decision.model_dump(mode="json")
        assert dumped["kind"] == "next_page"
        assert dumped["next_stage"] == "STAGE_1_1"

    def test_position_update_defaults(self):
        update = PositionUpdate(page=3, line=1, stage=Stage.STAGE_1_1)
        assert update.corpus_complete is False

    def test_task_plan_valid(self):
        plan = TaskPlan(page=5, stage=Stage.STAGE_1_2, start_line=1, end_line=7, required_count=80)
        assert plan.required_count == 80

    def test_task_plan_invalid_required_count(self):
        with pytest.raises(ValueError):
            TaskPlan(page=5, stage=Stage.STAGE_3, start_line=1, end_line=15, required_count=0)

    def test_task_plan_invalid_line(self):
        with pytest.raises(ValueError):
            TaskPlan(page=5, stage=Stage.STAGE_3, start_line=0, end_line=15, required_count=1)


class TestSettingsSchema:
    """Test memorization settings."""

    def test_defaults(self):
        settings = MemorizationSettings()
        assert settings.first_page_lines == 7
        assert settings.second_page_lines == 6
        assert settings.standard_page_lines == 15
        assert settings.total_pages == 602
        assert settings.repetition_count == 80

    def test_five_line_first_page(self):
        assert MemorizationSettings(first_page_lines=5).first_page_lines == 5

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            MemorizationSettings(first_page_lines=0)
        with pytest.raises(ValueError):
            MemorizationSettings(standard_page_lines=7)
        with pytest.raises(ValueError):
            MemorizationSettings(repetition_count=0)


class TestSchemaImports:
    """Test that all schemas can be imported from the main module."""

    def test_import_from_hifztrack_schemas(self):
        from hifztrack.schemas import (
            ProgressDecision,
            ProgressSnapshot,
            MemorizationSettings,
        )
        assert ProgressDecision is not None
        assert ProgressSnapshot is not None
        assert MemorizationSettings is not None

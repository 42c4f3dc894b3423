"""
hifztrack Classroom - Page geometry and the stage progression engine.

This module provides:
- PageGeometry: line counts per page and the global line index
- ProgressionEngine: stage sequencing, line ranges and progression decisions
"""

from .geometry import (
    PageGeometry,
    DEFAULT_GEOMETRY,
    line_count_for_page,
    global_line_index,
    position_from_global_line,
    total_lines,
)

from .progression import (
    ProgressionEngine,
    DEFAULT_ENGINE,
    SIMPLE_PAGE_MAX_LINES,
    FULL_STAGE_SEQUENCE,
    SIMPLE_STAGE_SEQUENCE,
    stage_sequence_for_page,
    next_stage,
    line_range_for_stage,
    is_learning_stage,
    lines_per_batch,
    current_learning_range,
    evaluate_progress,
    stage_info,
    stage_kind,
)

__all__ = [
    # Geometry
    "PageGeometry",
    "DEFAULT_GEOMETRY",
    "line_count_for_page",
    "global_line_index",
    "position_from_global_line",
    "total_lines",
    # Progression
    "ProgressionEngine",
    "DEFAULT_ENGINE",
    "SIMPLE_PAGE_MAX_LINES",
    "FULL_STAGE_SEQUENCE",
    "SIMPLE_STAGE_SEQUENCE",
    "stage_sequence_for_page",
    "next_stage",
    "line_range_for_stage",
    "is_learning_stage",
    "lines_per_batch",
    "current_learning_range",
    "evaluate_progress",
    "stage_info",
    "stage_kind",
]

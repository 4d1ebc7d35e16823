import pytest

from app.utils.task_progress import (
    StepSet,
    TaskStep,
    band_color,
    matches_progress_filter,
    progress,
    progress_bucket,
    toggled,
)

ALL_DONE = StepSet(True, True, True, True, True, True)


def test_two_of_six_steps():
    result = progress(StepSet(measure=True, mark=True))
    assert result.completed == 2
    assert result.total == 6
    assert result.percentage == pytest.approx(33.33, abs=0.01)
    assert band_color(result.percentage) == "orange"


def test_all_steps_done():
    result = progress(ALL_DONE)
    assert result.completed == 6
    assert result.percentage == 100
    assert band_color(result.percentage) == "green"


def test_no_steps_done():
    result = progress(StepSet())
    assert result.completed == 0
    assert result.percentage == 0
    assert band_color(result.percentage) == "red"


@pytest.mark.parametrize(
    "percentage, color",
    [(100, "green"), (99.9, "blue"), (75, "blue"), (74.9, "yellow"), (50, "yellow"),
     (49.9, "orange"), (25, "orange"), (24.9, "red"), (0, "red")],
)
def test_band_lower_bounds_are_inclusive(percentage, color):
    assert band_color(percentage) == color


def test_toggle_flips_exactly_one_step():
    steps = StepSet(measure=True)
    after = toggled(steps, TaskStep.CUT)
    assert after == StepSet(measure=True, cut=True)
    assert toggled(after, TaskStep.MEASURE) == StepSet(cut=True)


def test_steps_can_be_ticked_in_any_order():
    steps = toggled(StepSet(), TaskStep.QUALITY_CHECK)
    assert steps.quality_check is True
    assert progress(steps).completed == 1


def test_from_task_reads_any_object_with_flags():
    class Row:
        measure = 1
        mark = 0
        cut = True
        bevel = False
        mount = None
        quality_check = False

    assert StepSet.from_task(Row()) == StepSet(measure=True, cut=True)


def test_progress_buckets_and_filters():
    assert progress_bucket(0) == "pending"
    assert progress_bucket(50) == "in_progress"
    assert progress_bucket(100) == "completed"

    assert matches_progress_filter(50, "pending")
    assert matches_progress_filter(0, "pending")
    assert not matches_progress_filter(100, "pending")
    assert matches_progress_filter(50, "in_progress")
    assert not matches_progress_filter(0, "in_progress")
    assert matches_progress_filter(100, "completed")
    assert matches_progress_filter(0, "all")

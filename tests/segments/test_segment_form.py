"""Tests for the stateful running-segment form adapter."""

import pytest

from program_builder.segments.form import RunningSegmentForm
from program_builder.workouts.errors import WorkoutValidationError
from program_builder.workouts.types import RunningSegment


class TestMinutesSecondsBoxes:
    """Tests for the minutes and seconds input boxes."""

    def test_time_minutes_derive_pace(self):
        form = RunningSegmentForm()
        form.set_distance_text("5")
        form.set_time_minutes("25")
        assert form.state.time == 25
        assert form.state.pace == 5
        assert form.pace_parts == ("5", "00")

    def test_seconds_combine_with_existing_minutes(self):
        form = RunningSegmentForm()
        form.set_distance_text("5")
        form.set_time_minutes("25")
        form.set_time_seconds("30")
        assert form.state.time == 25.5
        assert form.time_parts == ("25", "30")
        assert form.pace_parts == ("5", "06")

    def test_pace_boxes_derive_time(self):
        form = RunningSegmentForm()
        form.set_distance(10)
        form.set_pace_minutes("4")
        form.set_pace_seconds("30")
        assert form.state.pace == 4.5
        assert form.state.time == 45

    @pytest.mark.parametrize("seconds", ["60", "75", "ab", "-1"])
    def test_invalid_seconds_are_ignored(self, seconds):
        form = RunningSegmentForm()
        form.set_time_minutes("20")
        form.set_time_seconds(seconds)
        assert form.state.time == 20

    def test_clearing_both_boxes_clears_the_field(self):
        form = RunningSegmentForm()
        form.set_distance(5)
        form.set_time_minutes("25")
        form.set_time_seconds("")
        form.set_time_minutes("")
        assert form.state.time is None
        assert form.time_parts == ("", "")


class TestDistanceBox:
    """Tests for the free-text distance box."""

    def test_pending_text_is_displayed_verbatim(self):
        form = RunningSegmentForm()
        form.set_time(25)
        form.set_distance_text("2.")
        assert form.distance_display == "2."
        assert form.state.pace is None

        form.set_distance_text("2.5")
        assert form.distance_display == "2.5"
        assert form.state.pace == 10

    def test_pending_comma_is_displayed_as_typed(self):
        form = RunningSegmentForm()
        form.set_distance_text("3,")
        assert form.distance_display == "3,"

    def test_whole_number_display(self):
        form = RunningSegmentForm()
        form.set_distance(5.0)
        assert form.distance_display == "5"

    def test_empty_display(self):
        assert RunningSegmentForm().distance_display == ""


class TestToSegment:
    """Tests for building a segment from the form."""

    def test_complete_form_builds_segment(self):
        form = RunningSegmentForm()
        form.set_distance_text("5")
        form.set_time(25)
        segment = form.to_segment()
        assert segment == RunningSegment(distance=5, time=25, pace=5)
        assert segment.type == "running"

    def test_incomplete_form_raises(self):
        form = RunningSegmentForm()
        form.set_distance(5)
        with pytest.raises(WorkoutValidationError) as exc_info:
            form.to_segment()
        assert exc_info.value.code == "INCOMPLETE_DRAFT"
        assert "Time is required" in exc_info.value.details
        assert "Pace is required" in exc_info.value.details

    def test_pending_distance_blocks_segment(self):
        form = RunningSegmentForm.from_segment(RunningSegment(distance=2, time=10, pace=5))
        form.set_distance_text("2.")
        with pytest.raises(WorkoutValidationError) as exc_info:
            form.to_segment()
        assert "Distance '2.' is incomplete" in exc_info.value.details

    def test_from_segment_prepopulates(self):
        form = RunningSegmentForm.from_segment(RunningSegment(distance=10, time=50, pace=5))
        assert (form.state.distance, form.state.time, form.state.pace) == (10, 50, 5)

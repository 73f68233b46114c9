"""
Tests for weekly-recurring opening projection.
"""

from datetime import date

import pendulum

from weekslots.domain.models import AvailabilityWindow, Event, EventKind
from weekslots.domain.recurrence import project_all, project_recurring


def _dt(text: str):
    return pendulum.parse(text, tz="UTC")


def _recurring(start: str, end: str) -> Event:
    return Event(
        kind=EventKind.OPENING,
        starts_at=_dt(start),
        ends_at=_dt(end),
        weekly_recurring=True,
    )


WINDOW = AvailabilityWindow(start=pendulum.date(2014, 8, 10))  # Sunday


class TestProjectRecurring:
    """Tests for project_recurring."""

    def test_projects_onto_matching_weekday(self):
        opening = _recurring("2014-08-04 09:30", "2014-08-04 12:30")  # Monday

        projected = project_recurring(opening, WINDOW)

        assert len(projected) == 1
        assert projected[0].starts_at == _dt("2014-08-11 09:30")
        assert projected[0].ends_at == _dt("2014-08-11 12:30")

    def test_source_opening_is_unchanged(self):
        opening = _recurring("2014-08-04 09:30", "2014-08-04 12:30")

        project_recurring(opening, WINDOW)

        assert opening.starts_at == _dt("2014-08-04 09:30")

    def test_sunday_opening_is_never_projected(self):
        opening = _recurring("2014-08-03 09:00", "2014-08-03 12:00")  # Sunday

        assert project_recurring(opening, WINDOW) == []

    def test_closed_weekdays_are_configurable(self):
        sunday = _recurring("2014-08-03 09:00", "2014-08-03 12:00")
        saturday = _recurring("2014-08-02 09:00", "2014-08-02 12:00")

        assert len(project_recurring(sunday, WINDOW, closed_weekdays=())) == 1
        assert project_recurring(saturday, WINDOW, closed_weekdays=(5, 6)) == []

    def test_opening_dated_after_window_contributes_nothing(self):
        opening = _recurring("2014-08-20 09:00", "2014-08-20 10:00")

        assert project_recurring(opening, WINDOW) == []

    def test_opening_first_scheduled_inside_window(self):
        opening = _recurring("2014-08-13 14:00", "2014-08-13 16:00")  # Wednesday

        projected = project_recurring(opening, WINDOW)

        assert [event.day for event in projected] == [date(2014, 8, 13)]

    def test_overnight_opening_keeps_day_offset(self):
        opening = _recurring("2014-08-05 22:00", "2014-08-06 01:00")  # Tuesday

        projected = project_recurring(opening, WINDOW)

        assert projected[0].starts_at == _dt("2014-08-12 22:00")
        assert projected[0].ends_at == _dt("2014-08-13 01:00")

    def test_project_all_flattens(self):
        openings = [
            _recurring("2014-08-04 09:00", "2014-08-04 10:00"),
            _recurring("2014-08-05 09:00", "2014-08-05 10:00"),
            _recurring("2014-08-03 09:00", "2014-08-03 10:00"),
        ]

        projected = project_all(openings, WINDOW)

        assert sorted(event.day for event in projected) == [date(2014, 8, 11), date(2014, 8, 12)]

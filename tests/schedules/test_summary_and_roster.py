from datetime import date, time

from salon_roster.core.enums import WeekDay
from salon_roster.schedules.model import DayHours, WeeklySchedule, parse_working_hours
from salon_roster.schedules.roster import expand_roster
from salon_roster.schedules.summary import parse_summary, summarize, working_days_label
from salon_roster.schedules.templates import build_template
from salon_roster.time_off.register import TimeOffRegister


def _schedule(template: str) -> WeeklySchedule:
    return WeeklySchedule(employee_id=1, days=build_template(template))


def test_summarize_groups_consecutive_days():
    text = summarize(_schedule("standard_short_saturday"))

    assert text == "Пн-Пт: 09:00-18:00, Сб: 10:00-16:00, Вс: выходной"


def test_summarize_short_runs_are_listed():
    schedule = WeeklySchedule(
        employee_id=1,
        days={
            WeekDay.MONDAY: DayHours.working(time(9, 0), time(18, 0)),
            WeekDay.TUESDAY: DayHours.working(time(9, 0), time(18, 0)),
            WeekDay.THURSDAY: DayHours.working(time(9, 0), time(18, 0)),
        },
    )

    assert summarize(schedule) == "Пн, Вт, Чт: 09:00-18:00"


def test_summarize_empty_schedule():
    assert summarize(WeeklySchedule(employee_id=1)) == "Нет данных"


def test_parse_summary_reads_ranges_and_lists():
    raw = parse_summary("Пн-Ср: 8:00-20:00, Чт, Пт: 10:00-19:00, Сб-Вс: выходной")
    days, dropped = parse_working_hours(raw)

    assert dropped == 0
    assert days[WeekDay.MONDAY] == DayHours.working(time(8, 0), time(20, 0))
    assert days[WeekDay.WEDNESDAY] == DayHours.working(time(8, 0), time(20, 0))
    assert days[WeekDay.THURSDAY] == DayHours.working(time(10, 0), time(19, 0))
    assert days[WeekDay.FRIDAY] == DayHours.working(time(10, 0), time(19, 0))
    assert days[WeekDay.SATURDAY] == DayHours.day_off()
    assert days[WeekDay.SUNDAY] == DayHours.day_off()


def test_parse_summary_skips_garbage_and_keeps_defaults():
    raw = parse_summary("как-нибудь, Пн: 11:00-15:00")
    days, _ = parse_working_hours(raw)

    assert days[WeekDay.MONDAY] == DayHours.working(time(11, 0), time(15, 0))
    assert days[WeekDay.SATURDAY] == DayHours.working(time(10, 0), time(16, 0))


def test_summary_round_trip():
    schedule = _schedule("standard_short_saturday")

    days, _ = parse_working_hours(parse_summary(summarize(schedule)))

    assert days == schedule.days


def test_working_days_label():
    assert working_days_label(_schedule("every_day")) == "Ежедневно"
    assert working_days_label(_schedule("standard")) == "Пн-Пт"
    assert working_days_label(_schedule("standard_short_saturday")) == "Пн, Вт, Ср, Чт, Пт, Сб"


def test_roster_marks_time_off_and_days_off():
    schedule = _schedule("standard")
    time_off = TimeOffRegister()
    time_off.add(date(2026, 2, 3), "Отпуск")

    roster = expand_roster(schedule, time_off, date(2026, 2, 1), date(2026, 2, 3))

    assert [r.day_name for r in roster] == ["Вс", "Пн", "Вт"]
    assert [r.is_working for r in roster] == [False, True, False]
    assert roster[1].start == time(9, 0)
    assert roster[2].time_off_reason == "Отпуск"
    assert roster[2].start is None

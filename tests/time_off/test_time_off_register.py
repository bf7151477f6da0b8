from datetime import date

from salon_roster.time_off.model import TimeOffException
from salon_roster.time_off.register import TimeOffRegister


def test_day_off_matches_exact_date_only():
    register = TimeOffRegister()
    register.add(date(2026, 3, 9), "Отпуск")

    assert register.is_day_off(date(2026, 3, 9))
    assert register.is_day_off("2026-03-09")
    # same weekday one week later is not affected
    assert not register.is_day_off(date(2026, 3, 16))
    assert register.reason_for(date(2026, 3, 16)) is None


def test_default_reason():
    register = TimeOffRegister()

    entry = register.add(date(2026, 3, 9), "  ")

    assert entry.reason == "Личные причины"
    assert register.reason_for(date(2026, 3, 9)) == "Личные причины"


def test_duplicate_dates_are_kept():
    register = TimeOffRegister()
    register.add(date(2026, 3, 9), "Отпуск")
    register.add(date(2026, 3, 9), "Больничный")

    assert len(register) == 2
    assert register.is_day_off(date(2026, 3, 9))
    assert register.reason_for(date(2026, 3, 9)) == "Отпуск"


def test_remove_then_readd_changes_reason():
    register = TimeOffRegister()
    register.add(date(2026, 3, 9), "Отпуск")
    register.add(date(2026, 3, 9), "Отпуск")

    assert register.remove(date(2026, 3, 9)) == 2
    register.add(date(2026, 3, 9), "Обучение")

    assert register.reason_for(date(2026, 3, 9)) == "Обучение"


def test_from_payload_drops_bad_rows():
    register = TimeOffRegister.from_payload(
        [
            {"date": "2026-03-09", "reason": "Отпуск"},
            {"date": "2026-03-10T00:00:00.000Z"},
            {"date": "not a date"},
            {"reason": "no date"},
            "2026-03-11",
        ]
    )

    assert register.entries == [
        TimeOffException(date(2026, 3, 9), "Отпуск"),
        TimeOffException(date(2026, 3, 10), "Личные причины"),
    ]


def test_between_and_payload():
    register = TimeOffRegister()
    register.add(date(2026, 3, 20), "B")
    register.add(date(2026, 3, 1), "A")
    register.add(date(2026, 4, 1), "C")

    assert [e.reason for e in register.between(date(2026, 3, 1), date(2026, 3, 31))] == ["A", "B"]
    assert register.to_payload()[0] == {"date": "2026-03-20", "reason": "B"}

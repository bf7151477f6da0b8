"""Salon Roster package.

Employee weekly availability and attendance for beauty-salon chains, organized by
feature modules (schedules, time_off, attendance, earnings, ...) with async
service layers over a REST backend.
"""

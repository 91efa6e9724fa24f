"""Attendance Engine package.

Reconciles biometric punches against shift schedules, deduction rules and the
holiday calendar, producing one auditable attendance verdict per employee per
day. Organized by feature modules (shifts, rules, attendance, ...) with a thin
Flask controller layer on top of pure services.
"""

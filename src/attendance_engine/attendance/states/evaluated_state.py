from __future__ import annotations

from datetime import date, timedelta

from ...common.datetime_utils import clock_on, round_minutes
from .base import DayOutcome, DayState


class EvaluatedState(DayState):
    """Both punches present: measure lateness/earliness against the shift."""

    def resolve(self, *, ctx, punches, rules, engine) -> DayOutcome:
        day = date.fromisoformat(ctx.date)
        shift_start = clock_on(day, ctx.shift_start)
        shift_end = clock_on(day, ctx.shift_end)
        if shift_end < shift_start:
            shift_end += timedelta(days=1)

        effective_start = shift_start + timedelta(minutes=ctx.grace_minutes)

        minutes_late = 0
        if punches.first_in > effective_start:
            minutes_late = round_minutes(punches.first_in - effective_start)

        minutes_early = 0
        if punches.last_out < shift_end:
            minutes_early = round_minutes(shift_end - punches.last_out)

        result = engine.evaluate_day(
            minutes_late=minutes_late,
            minutes_early=minutes_early,
            rules=rules,
            daily_salary=ctx.daily_salary,
            sanctioned=ctx.sanctioned,
        )
        return DayOutcome(
            status=result.status,
            attendance_deduction=result.attendance_deduction,
            deduction_amount=result.deduction_amount,
            deduction_remarks=result.remark,
        )

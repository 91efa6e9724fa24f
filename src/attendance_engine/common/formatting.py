from __future__ import annotations


def format_money(amount: float) -> str:
    return f"{amount:.2f}"


def format_number(value: float) -> str:
    """Render a rule value without a trailing ``.0`` (``1`` not ``1.0``, ``0.5`` stays)."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)

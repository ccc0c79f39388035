from __future__ import annotations

from .model import PayrollLine


def validate_payroll_line(line: PayrollLine) -> list[str]:
    """Advisory checks for a reviewer. An empty list means nothing to flag."""
    issues: list[str] = []

    if line.net_payable < 0:
        issues.append(f"Net payable is negative: {line.net_payable}")
    if line.hours.overtime_hours > 0 and line.earnings.overtime <= 0:
        issues.append("Overtime hours recorded without overtime pay")
    if line.deductions.total > line.earnings.gross:
        issues.append(
            f"Deductions ({line.deductions.total}) exceed gross earnings ({line.earnings.gross})"
        )
    if line.attendance.incomplete_sessions:
        issues.append(f"{line.attendance.incomplete_sessions} check-in(s) without a check-out")
    return issues

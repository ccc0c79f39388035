"""Attendance period & payroll engine.

Feature modules (shifts, periods, attendance, payroll, ...) hold plain
dataclass models, Protocol repositories for collaborators, and services.
Nothing here talks to a database or the network.
"""

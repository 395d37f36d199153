"""
Domain helpers with no database or HTTP dependencies.

Modules:
- recurrence: day/week boundaries for recurring to-do resets
- durations: time-lapse conversion and human-readable durations
- invite_codes: partner invite code generation and normalisation
- presentation: display names, initials and expiry labels
"""

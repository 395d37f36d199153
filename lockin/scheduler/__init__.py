"""
Background jobs.

The Celery beat schedule resets recurring goal to-dos once an hour so daily
and weekly items reopen even when nobody opens their goal.
"""

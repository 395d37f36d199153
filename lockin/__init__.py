"""Lock In.

Backend service and client toolkit for tracking study goals through
self-recorded time-lapse videos.

High-level architecture
-----------------------

- ``lockin.server``: FastAPI application exposing per-entity queries and
  mutations (goals, goal to-dos, study sessions, to-dos, partners, shared
  videos). Every call is checked against the caller's identity token.
- ``lockin.core``: database entities and repositories, I/O schemas, domain
  errors, logging and the small domain helpers (recurring resets, durations,
  invite codes).
- ``lockin.scheduler``: Celery beat schedule for the hourly recurring to-do
  reset.
- ``lockin.client``: async API client, on-device cache mirror, thumbnail cache
  and the auth-gated sync coordinator.
"""

__version__ = "0.1.0"

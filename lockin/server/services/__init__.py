"""
Server-side domain services.

Each service wraps a ``SqlRepoBundle`` and enforces ownership and business
rules for one endpoint group; routers stay thin and the scheduler reuses the
same services.
"""

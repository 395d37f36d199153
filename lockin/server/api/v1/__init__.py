"""Version 1 REST endpoints, one module per resource."""

"""Lock In HTTP API server."""

"""Constants shared by the API layer."""

PROJECT_NAME = "Lock In"
API_V1_STR = "/api/v1"

"""Application-wide constants."""

PROJECT_NAME = "BíbliaFS"

API_PREFIX = "/api"

# Oldest client build still accepted by the API.
MIN_SUPPORTED_APP_VERSION = "1.2.0"

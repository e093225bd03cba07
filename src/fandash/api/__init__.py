"""FastAPI host for the dashboard."""

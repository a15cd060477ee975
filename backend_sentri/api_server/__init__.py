"""
API server package — HTTP interface over the compliance pipeline.

Validates wallet format, runs checks through backend_sentri.analytics and keeps
recent results in an in-memory store for the dashboard.
"""

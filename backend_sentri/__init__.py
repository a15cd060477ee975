"""
Backend Sentri — deterministic wallet compliance scoring with content-addressed provenance.

Scores a wallet identifier with three hash-derived agents, classifies the
weighted result and derives a reproducible provenance token from a canonical
payload. Thin collaborators (in-memory store, FastAPI server, batch CLI)
sit on top of the pure scoring core in backend_sentri.analytics.
"""

__version__ = "0.1.0"

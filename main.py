"""
Main entrypoint: FastAPI server for Sentri compliance checks.

Env: API_HOST, API_PORT, LOG_LEVEL, SENTRI_LEDGER_LABEL, COMPLIANCE_STORE_CAPACITY.

Equivalent: uvicorn backend_sentri.api_server.app:app --host 0.0.0.0 --port 8000
"""

from backend_sentri.sentri_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    import uvicorn

    from backend_sentri.api_server.app import app
    from backend_sentri.config import get_settings

    settings = get_settings()
    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()

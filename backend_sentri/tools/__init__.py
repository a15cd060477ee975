"""Command-line tools (run with py -m backend_sentri.tools.<name>)."""

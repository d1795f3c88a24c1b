"""Operational command line tools (run with `python -m app.scripts.<name>`)."""

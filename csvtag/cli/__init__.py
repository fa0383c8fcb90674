"""Command line interface for csvtag (`python -m csvtag.cli`)."""

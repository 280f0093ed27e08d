"""Command line interface for durafmt."""

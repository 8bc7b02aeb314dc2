"""IGC flight logbook: flight statistics, site resolution and batch summaries."""

__version__ = "1.0.0"

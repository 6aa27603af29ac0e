"""mercator: a personal command line console for financial things."""

__version__ = "0.3.0"

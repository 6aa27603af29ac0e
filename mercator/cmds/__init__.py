"""Command definitions, grouped by the scope that installs them."""

"""Command-line entry points for gearratio."""

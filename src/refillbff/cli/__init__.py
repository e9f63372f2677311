"""Command-line interface for refillbff."""

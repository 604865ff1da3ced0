"""Command-line exposure for repoinit."""

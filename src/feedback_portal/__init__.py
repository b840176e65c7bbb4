"""Student feedback portal: submission and sentiment classification."""

__version__ = "1.0.0"

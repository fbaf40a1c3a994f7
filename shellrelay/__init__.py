"""shellrelay - multiplex browser terminal sessions onto remote SSH shells."""

__version__ = "0.1.0"

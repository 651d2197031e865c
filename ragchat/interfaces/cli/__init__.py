"""Command-line entry points: ``ragchat-ingest``, ``ragchat-query`` and ``ragchat-setup-db``."""

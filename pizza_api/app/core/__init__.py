"""Core infrastructure: settings, logging, errors, storage and security."""

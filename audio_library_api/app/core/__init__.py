"""Core infrastructure: settings, logging, storage, errors and assets."""

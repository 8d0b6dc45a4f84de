"""Data types exposed to the configuration language (timestamp, ...)."""

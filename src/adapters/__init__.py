"""Adapters: command execution and the make/pkg search backends."""

"""Core: domain records, field catalogs, configuration and search services."""

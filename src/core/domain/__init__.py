"""Domain models and entities.

- Records, field catalogs and port options: plain data and pure functions.
- The domain knows nothing about subprocesses or make/pkg command lines.
"""

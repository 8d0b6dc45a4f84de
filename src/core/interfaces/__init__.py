"""Core interfaces/abstractions.

- Contracts (Protocol) implemented by record kinds and adapters.
- The core depends on these, never on concrete adapters.
"""

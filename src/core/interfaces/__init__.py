"""Core interfaces.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: services depend on abstractions, not on httpx.
"""

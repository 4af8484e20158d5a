"""Domain models and errors.

Why:
- Pure, strict data structures (Pydantic v2) and the error taxonomy.
- The domain knows nothing about HTTP or the CLI: only registrar concepts.
"""

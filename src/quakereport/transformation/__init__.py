"""
Transformation Layer - Pure, Deterministic Functions

This layer turns raw feed text into earthquake records.
- Pure functions (input → output)
- No I/O operations
- Unit testable
- Deterministic results
"""

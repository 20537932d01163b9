"""
Extract Layer - Pure I/O to the USGS Event Service

This layer handles all external data fetching with no business logic.
- No imports from transform or orchestration layers
- Returns raw response text for the transform layer to parse
- Handles timeouts and error logging; never retries
"""

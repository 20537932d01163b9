"""
Orchestration Layer - Workflow Coordination

This layer coordinates a load.
- Pure workflow coordination
- No business logic
- Composes extract and transform operations, off the caller's thread
"""

"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, denylist defaults, feature property types
- exceptions: Custom exception hierarchy
"""

"""Core functionality for CCU access.

This package contains:
- controller: Controller class, the entry point for one CCU session
- mapping: Mapping of ids and names to entity handles
- connection: HTTP transport to the CCU REST interface
- cache: Persistent cache pools
- config: Configuration handling
- exceptions: Error types
"""

"""Data models and utility functions.

This package contains:
- entities: Handles for devices, channels, parameters, rooms, functions,
  programs and system variables
- types: TypedDict definitions of the cached CCU data
- translation: Localized names of built-in rooms and functions
- utils: Utility functions (name normalisation, composite ids, etc.)
"""

"""Utility functions for the CCU client.

This module contains helper functions used across the application:
- normalize_name: Canonical form of entity names for lookups
- join_id / split_id: Composite channel and parameter ids
- link_target: Extract the target id from a CCU hyperlink
- parse_value: Convert command line values to JSON types
- similarity_score: Canonical fuzzy string matching algorithm
- find_similar_strings: Find similar strings using fuzzy matching
- get_controller: Helper to create a controller for CLI commands
"""

import json

import click

# Separator of composite ids, e.g. 'ABC1234567/1/LEVEL'
ID_SEPARATOR = '/'


def normalize_name(name: str) -> str:
    """Return the form of a name used as key in the name indexes."""
    return name.strip().lower()


def join_id(*parts) -> str:
    """Build a composite id from its parts."""
    return ID_SEPARATOR.join(str(part) for part in parts)


def split_id(entity_id: str) -> list[str]:
    """Split a composite id into its parts."""
    return entity_id.split(ID_SEPARATOR)


def link_target(href: str) -> str:
    """Return the last path segment of a link target.

    '/room/1234' -> '1234', 'LEVEL' -> 'LEVEL'
    """
    return href.rstrip(ID_SEPARATOR).rsplit(ID_SEPARATOR, 1)[-1]


def strip_prefix(href: str, prefix: str) -> str:
    """Remove a collection prefix from a link target.

    '/device/ABC1234567/1' with prefix '/device/' -> 'ABC1234567/1'
    """
    if href.startswith(prefix):
        return href[len(prefix):]
    return href


def parse_value(text: str):
    """Convert a value given on the command line to a JSON type.

    'true' -> True, '21.5' -> 21.5, '3' -> 3, anything else stays a string.
    """
    try:
        return json.loads(text)
    except ValueError:
        return text


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    This is the canonical implementation used throughout the application
    for fuzzy matching (command typo suggestions, entity name suggestions).

    Args:
        s1: First string to compare
        s2: Second string to compare

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    if s1_lower == s2_lower:
        return 100

    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0


def find_similar_strings(target: str, candidates: list[str], limit: int = 5) -> list[str]:
    """Find similar strings using simple similarity scoring.

    Args:
        target: The string to match against
        candidates: List of candidate strings to search
        limit: Maximum number of results to return

    Returns:
        List of similar strings, sorted by similarity score (most similar first)
    """
    scored = [(candidate, similarity_score(target, candidate)) for candidate in candidates]
    filtered = [(c, s) for c, s in scored if s > 0]
    sorted_matches = sorted(filtered, key=lambda x: x[1], reverse=True)

    return [c for c, s in sorted_matches[:limit]]


def get_controller():
    """Get the controller of the current CLI invocation.

    The root command stores it on the click context; commands use it to
    talk to the CCU. It is closed (and the cache committed) when the
    context is torn down.
    """
    ctx = click.get_current_context()
    return ctx.find_object(dict)['controller']

"""Core primitives shared across the package."""

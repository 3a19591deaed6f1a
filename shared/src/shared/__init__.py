"""
Shared utilities for Lumière components.
"""

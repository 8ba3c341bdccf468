"""Utilities for CSS Validator."""

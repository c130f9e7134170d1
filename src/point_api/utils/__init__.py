"""Utility modules for the Point API client."""

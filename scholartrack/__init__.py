"""Scholarship application tracker: API client, view state and map helpers."""

"""Shared pytest configuration for the booking service test suite."""

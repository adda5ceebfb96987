"""Adapters for the services Stackview reads from."""

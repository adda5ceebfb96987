"""Tests for stackview._cli.commands."""

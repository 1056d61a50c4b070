"""Tests for Donatello Gateway."""

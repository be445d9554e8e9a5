"""Core logic."""

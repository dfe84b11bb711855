"""Scriptgate CLI package."""

"""Collaborative notes API."""

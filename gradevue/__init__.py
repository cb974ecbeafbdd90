"""Fetch, decode and diff StudentVUE gradebooks."""

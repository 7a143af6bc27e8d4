"""Boundary layer: disk storage and LLM provider access."""

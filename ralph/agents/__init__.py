"""Coding agent invocation."""

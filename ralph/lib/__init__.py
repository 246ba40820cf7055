"""Shared configuration, console output, validation and file helpers."""

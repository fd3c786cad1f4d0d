"""Presentation layers consuming engine events."""

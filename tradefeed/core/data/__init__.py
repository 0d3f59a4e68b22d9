"""Data acquisition and storage."""

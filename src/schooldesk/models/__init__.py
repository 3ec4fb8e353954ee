"""Data models for schooldesk."""

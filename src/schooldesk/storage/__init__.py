"""Storage layer for schooldesk."""

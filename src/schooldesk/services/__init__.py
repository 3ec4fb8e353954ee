"""Service layer for schooldesk."""

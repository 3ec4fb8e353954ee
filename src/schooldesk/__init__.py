"""Role-based user lookup and edit workflow for a school dashboard."""

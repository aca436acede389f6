"""Data models for the KSS dashboard."""

"""Data models for HubPulse."""

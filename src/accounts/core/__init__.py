"""Core services and validation for accounts."""

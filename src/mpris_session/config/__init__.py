"""Configuration for the session manager."""

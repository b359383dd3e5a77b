"""Version 1 statistics endpoints."""

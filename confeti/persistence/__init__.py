"""Persistence layer - ArangoDB access for reports and speaker stats."""

"""Helpers layer - DTOs, exceptions and logging utilities shared by all layers."""

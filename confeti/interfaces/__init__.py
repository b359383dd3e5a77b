"""
confeti - Interfaces Package
============================

Contains all user-facing interfaces (presentation layer).

Structure:
- api/: FastAPI HTTP interface for the statistics endpoints
"""

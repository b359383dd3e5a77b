"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

Rules for DTO modules:
- Import only stdlib and typing (no confeti.* imports)
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no DB access, no business logic

Modules:
- report_dto: Report records and countable stats entities (lookup results)
- stats_dto: Aggregate results returned by services
"""

"""Application layer - use case orchestration over the domain services."""

"""Application layer: resolution services and batch orchestration."""

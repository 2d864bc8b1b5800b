"""Application layer: use case orchestration over the boundary layer."""

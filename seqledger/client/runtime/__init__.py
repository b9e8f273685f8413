"""Runtime layer: REST transport and pagination."""

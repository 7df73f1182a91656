"""Application layer: ports, cascade resolution, merge rules."""

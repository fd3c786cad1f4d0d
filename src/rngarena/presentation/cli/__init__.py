"""Console presentation for spectating fights."""

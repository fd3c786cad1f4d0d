"""Domain records and the pure beat resolution algorithm."""

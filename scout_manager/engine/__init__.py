"""Game engines for Scout Manager."""

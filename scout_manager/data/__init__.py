"""Data generation for Scout Manager."""

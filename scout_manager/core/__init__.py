"""Core configuration, context and models for Scout Manager."""

"""Configuration and reference data loading."""

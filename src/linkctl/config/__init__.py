"""Configuration — settings models, file locations, and logging setup."""

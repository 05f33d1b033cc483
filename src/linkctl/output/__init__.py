"""Output layer — turning ServiceResult into terminal text."""

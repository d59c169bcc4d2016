"""Data-access contracts used by the controllers."""

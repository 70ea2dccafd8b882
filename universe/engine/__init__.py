"""Logging support shared by the generators."""

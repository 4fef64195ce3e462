"""Utilities: argument tokenizing, environment access and logging."""

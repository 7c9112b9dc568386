"""Shared kernel: domain building blocks, error taxonomy, unit of work and message bus."""

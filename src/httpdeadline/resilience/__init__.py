"""Resilience – deadline-bounded execution contexts."""

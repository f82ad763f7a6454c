"""Kernel – error hierarchy and time primitives."""

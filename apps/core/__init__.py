"""
Core components shared across the composition service.

This package provides request logging middleware.
"""

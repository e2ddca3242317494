"""Hierarchical page-table virtual memory simulator with swap-based eviction."""

__version__ = "0.1.0"
__all__ = ["physical_memory", "virtual_memory", "cli"]
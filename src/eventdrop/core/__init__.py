"""Core domain package for eventdrop.

Core contains matcher compilation, per-event evaluation and batch compaction
without any file or CLI-specific code, keeping the filtering logic portable.
"""

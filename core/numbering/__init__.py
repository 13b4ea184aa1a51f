"""
Bistro Core Numbering - Public API
"""

from core.numbering.sequence import MonotonicSequence

__all__ = ["MonotonicSequence"]

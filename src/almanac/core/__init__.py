"""
Core domain models, errors and contracts.

This module contains the foundational building blocks that are independent
of any particular input source (text files, JSON payloads, CLI).
"""

"""
Markups - Lazy Capability Loader

Loads optional heavyweight rendering/export capabilities on demand so the
editor starts fast.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- detector: Decide which capabilities a document needs
- loader: Cache store, in-flight dedup, request/status API
- capabilities: Factories for the optional capabilities
- scheduler: Idle-time background preloading
- middleware: Request activity tracking for the idle signal
- api: Request/response models for the diagnostics API
"""

__version__ = "1.0.0"

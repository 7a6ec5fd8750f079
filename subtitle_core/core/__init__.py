"""Core model, codecs and timing algebra.

WHY: The core package is the format-neutral heart of the library. Adapters
and the CLI depend on it; it depends on nothing outside the standard library.

HOW: duration.py and color.py are the leaf codecs, model.py defines the
Document entity graph, styles.py resolves inheritance, algebra.py holds the
document-level timing operations, errors.py the error taxonomy and clock.py
the injectable time source.

RULES:
- No file or stream I/O in this package
- Codec functions are pure and reentrant
"""

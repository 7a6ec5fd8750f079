"""Subtitle Core: format-agnostic subtitle document model and timing algebra.

WHY: Every subtitle container (SRT, WebVTT, SSA, TTML, ...) carries the same
basic content: timed cues made of styled lines, plus shared styles and
on-screen regions. Adapters that share one in-memory model can convert
between formats, and re-timing operations only have to be written once.

HOW: Leaf codecs (duration and packed colour text) sit under the Document
model that adapters populate. The timing algebra mutates a Document (order,
shift, force duration, fragment, unfragment, merge).
Adapters are looked up by file extension in a registry.

RULES:
- Adapters consume and produce only the Document model
- The algebra never performs I/O and never reads the wall clock
- Adding a new container format = one new adapter module, no core changes
"""

__version__ = "0.1.0"

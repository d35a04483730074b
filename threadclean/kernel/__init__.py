"""Kernel utilities shared across the extraction pipeline.

Rules:
- Kernel code must not import from the pipeline modules (parsers, text, extractor).
- Kernel utilities should stay small and stable; avoid business logic here.
"""

"""NLP utilities for query resolution.

Module scope:
- Text normalization, tokenization, and stemming (`text_normalizer`).
- Closed synonym expansion (`synonyms`).
- Ordered topic detection (`intent_router`, answer text in `formatters`).
- FAQ overlap scoring (`faq_matcher`).

Determinism profile:
- Fully deterministic rule logic; no model inference.
"""

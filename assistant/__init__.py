"""Grounded query resolution for a portfolio site's conversational widget.

Package layout:
- `nlp`: normalization, synonyms, intent routing, FAQ overlap matching.
- `safety`: confidentiality/sensitive-topic gate and refusal policy.
- `core`: resolution orchestration and result types.
- `knowledge`: record access, loading, and configuration.
- `api`: HTTP and CLI adapters.
"""

__version__ = "0.1.0"

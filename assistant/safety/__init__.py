"""Safety package.

This package contains the rule-based gate that intercepts confidentiality probes
and sensitive-topic questions, and the refusal policy used to answer them.
"""

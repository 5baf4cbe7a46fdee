"""Closed synonym table mapping informal query terms onto canonical domain terms.

Expansion is a pure 1:1 token substitution. It is not multi-word aware; phrases
such as "machine learning" reach the matcher as two independent tokens.
"""

SYNONYMS = {
    # Role / work
    "job": "role",
    "jobs": "role",
    "position": "role",
    "positions": "role",
    "opening": "role",
    "hire": "role",
    "hiring": "role",
    "employ": "role",
    "work": "role",

    # Resume
    "cv": "resume",
    "curriculum": "resume",

    # Education
    "school": "education",
    "study": "education",
    "studied": "education",
    "university": "education",
    "college": "education",
    "degree": "education",

    # Certification
    "cert": "certification",
    "certs": "certification",
    "badges": "certification",
    "badge": "certification",
    "credential": "certification",
    "credentials": "certification",

    # Contact
    "reach": "contact",
    "connect": "contact",
    "message": "contact",
    "email": "contact",
    "mail": "contact",

    # Tech stack
    "tech": "skill",
    "technologies": "skill",
    "tools": "skill",
    "stack": "skill",
    "proficient": "skill",
    "expertise": "skill",

    # Projects
    "project": "projects",
    "portfolio": "projects",
    "built": "projects",
    "build": "projects",

    # Background
    "background": "experience",
    "history": "experience",
    "career": "experience",

    # AI / ML
    "ai": "ml",
}


def expand_synonyms(tokens: list[str]) -> list[str]:
    """Replace each token with its canonical form when one is registered."""
    return [SYNONYMS.get(t, t) for t in tokens]

"""Bounded lexical-overlap matcher over the knowledge record's FAQ list.

Scoring:
- `overlap_score(query_tokens, candidate_tokens)` stems both sides and expands
  synonyms on the query side. The candidate side is the set of its stems plus
  their own synonym expansion.
- Each query token scores 1.0 when its expanded stem is in the candidate set,
  otherwise 0.5 when the raw token appears verbatim among the candidate tokens.
- The hit total is divided by the longer of the two token lists, so the score
  stays within [0, 1].

The expansion is asymmetric: the curated candidate vocabulary is expanded only
through its own stems, while free-form query vocabulary is mapped onto it. The
acceptance threshold is tuned against this asymmetry.

Selection:
- Per FAQ item the question score competes with the discounted (x0.7) answer score.
- Highest score wins; ties keep the earlier item.
- A best score below `FAQ_ACCEPT_THRESHOLD` yields no match.

Determinism:
- Pure function of its inputs; candidates are discarded after each call.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from assistant.nlp.synonyms import expand_synonyms
from assistant.nlp.text_normalizer import stem, tokenize


FAQ_ACCEPT_THRESHOLD = 0.2
ANSWER_MATCH_DISCOUNT = 0.7

EXACT_HIT_WEIGHT = 1.0
RAW_HIT_WEIGHT = 0.5

# Scores are compared after rounding so products like 2/7 x 0.7 land on 0.2.
SCORE_PRECISION = 9


@dataclass(frozen=True)
class Candidate:
    """FAQ item paired with its overlap score for one query."""

    item: Mapping[str, Any]
    score: float


def overlap_score(query_tokens: list[str], candidate_tokens: list[str]) -> float:
    """Score how much of `query_tokens` is covered by `candidate_tokens`."""
    if not query_tokens or not candidate_tokens:
        return 0.0

    query_expanded = expand_synonyms([stem(t) for t in query_tokens])

    candidate_stemmed = [stem(t) for t in candidate_tokens]
    candidate_set = set(candidate_stemmed) | set(expand_synonyms(candidate_stemmed))
    candidate_raw = set(candidate_tokens)

    hits = 0.0
    for raw, expanded in zip(query_tokens, query_expanded):
        if expanded in candidate_set:
            hits += EXACT_HIT_WEIGHT
        elif raw in candidate_raw:
            hits += RAW_HIT_WEIGHT

    return hits / max(len(query_tokens), len(candidate_tokens))


def score_faq_items(query_tokens: list[str], faq: Iterable[Mapping[str, Any]]) -> list[Candidate]:
    """
    Score every well-formed FAQ item against the query tokens.

    Items missing a string `q` or `a` are skipped. A repeated `id` is scored only
    once, on its first occurrence.
    """
    candidates: list[Candidate] = []
    seen_ids: set = set()

    for item in faq:
        if not isinstance(item, Mapping):
            continue

        question = item.get("q")
        answer = item.get("a")
        if not isinstance(question, str) or not isinstance(answer, str):
            continue

        item_id = item.get("id")
        if item_id is not None:
            if item_id in seen_ids:
                continue
            seen_ids.add(item_id)

        question_score = overlap_score(query_tokens, tokenize(question))
        answer_score = overlap_score(query_tokens, tokenize(answer)) * ANSWER_MATCH_DISCOUNT

        score = round(max(question_score, answer_score), SCORE_PRECISION)
        candidates.append(Candidate(item=item, score=score))

    return candidates


def best_candidate(candidates: Iterable[Candidate]) -> Candidate | None:
    """Return the top-scoring accepted candidate, keeping the earliest on ties."""
    best: Candidate | None = None

    for candidate in candidates:
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None or best.score < FAQ_ACCEPT_THRESHOLD:
        return None

    return best


def pick_faq_answer(text, faq: Iterable[Mapping[str, Any]]) -> Candidate | None:
    """Return the best FAQ candidate for raw query text, or `None`."""
    query_tokens = tokenize(text)
    if not query_tokens:
        return None

    return best_candidate(score_faq_items(query_tokens, faq))

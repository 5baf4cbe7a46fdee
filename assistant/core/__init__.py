"""Core orchestration package.

Architectural role:
    Exposes the resolution layer that sits between API/CLI entrypoints and the
    lower-level subsystems (safety, routing, FAQ matching).

Composition:
    - `engine`: `resolve(text, record)` control flow.
    - `routing_types`: `ResolutionResult` / `ActionLink` value types.

Determinism and side effects:
    Package import itself is deterministic and side-effect free.
"""

"""Resume DocGen — template-driven .docx generation over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

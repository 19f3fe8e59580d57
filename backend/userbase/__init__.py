"""userbase - layered user API (routes -> handlers -> services -> repositories).

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

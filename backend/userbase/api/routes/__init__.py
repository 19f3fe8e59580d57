"""Route Registrars - one module per resource/concern.

Invariants:
    - Each registrar builds its collaborators once and binds them to an APIRouter
    - Collaborators are passed in explicitly; no global lookups
"""

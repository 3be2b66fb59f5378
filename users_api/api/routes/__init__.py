"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never talk to the driver directly (UserStore dependency only)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""

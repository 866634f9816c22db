"""Infrastructure Layer — user stores, database sessions, tokens, and logging.

Invariants:
    - Infrastructure imports core/ types and errors, never services/ or api/
    - Driver exceptions are mapped to core errors before leaving this layer

Design Decisions:
    - Two UserStore implementations (in-memory, SQL) behind one Protocol
"""

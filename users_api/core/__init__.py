"""Core Layer — domain types, error hierarchy, and boundary protocols.

Invariants:
    - No IO and no framework imports (FastAPI, pymongo) in this package
"""

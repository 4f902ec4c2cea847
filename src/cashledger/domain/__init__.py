"""Domain layer for cashledger.

Modules are imported directly (``cashledger.domain.ledger`` and so on) so the
persistence layer can depend on ``cashledger.domain.entities`` without
pulling in the services.
"""

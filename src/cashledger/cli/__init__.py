"""Command line interface for cashledger."""

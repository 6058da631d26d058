"""unictl — fungible-token ledger control utility."""

__version__ = "0.1.0"

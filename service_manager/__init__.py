"""Multi-chain entity resolution: blocks, transactions, accounts and logs."""

__version__ = "0.1.0"

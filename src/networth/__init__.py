"""Multi-market net worth tracking: quotes, FX conversion, ledger replay."""

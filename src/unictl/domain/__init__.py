"""Domain layer: the ledger state machine, error taxonomy, and amount helpers."""

"""Settlement ledger between partner tenants."""

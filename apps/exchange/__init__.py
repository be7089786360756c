"""Cross-tenant reservation requests."""

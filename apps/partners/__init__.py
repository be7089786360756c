"""Partnerships between tenants and the activities they share."""

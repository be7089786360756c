"""Reservations: direct, imported and converted from partner requests."""

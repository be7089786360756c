"""Operational dispatch log and reservation reconciliation."""

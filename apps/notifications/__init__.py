"""Outbound WhatsApp notifications and their delivery log."""

"""Capacity app package.

Per-tenant, per-activity, per-date/time slot counters. Every booking origin
(direct, imported from an external channel, converted partner request)
moves the same ``booked_slots`` counter, and every mutation runs inside a
transaction holding the slot row lock.
"""

"""Tenants app package.

A tenant is an independent tour-operator account and the unit of data
isolation. Tenants own activities; every capacity slot, reservation and
settlement record is scoped to one.
"""

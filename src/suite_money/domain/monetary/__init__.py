"""Monetary domain package.

This package contains classes for handling monetary amounts and currencies:
Currency definitions and the registry that resolves currency codes, and Money
values stored as an exact integer number of minor units.
"""

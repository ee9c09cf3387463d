"""Canteen ordering service — catalog, stock ledger, orders and live notifications."""

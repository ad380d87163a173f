"""Operator session (login, logout, restore, role checks)."""

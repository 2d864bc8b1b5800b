"""Explorely travel social platform backend."""

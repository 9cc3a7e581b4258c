"""Servizi per utenti e credenziali."""

"""Servizi per le categorie."""

"""Servizi per transazioni, ricorrenze e relative proiezioni."""

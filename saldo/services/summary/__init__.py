"""Riepilogo del conto e verifica dello scoperto."""

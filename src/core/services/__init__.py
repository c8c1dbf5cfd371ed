"""Servicios del Core: secuencias de llamadas reutilizables desde la CLI o tests."""

"""Adaptadores de I/O: transporte HTTP, firma, ejecución de peticiones y jobs."""

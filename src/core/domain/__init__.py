"""Modelos y entidades del dominio.

- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y los
  descriptores de petición.
- El dominio no conoce transporte ni CLI: solo conceptos del servicio.
"""

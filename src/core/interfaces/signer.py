"""Contrato del signer.

El Core solo necesita una capacidad: dada la cadena exacta de la cabecera
`date`, devolver el valor de `Authorization`. Cómo se carga la clave o qué
algoritmo se usa queda fuera.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Signer(Protocol):
    """Produce el valor de `Authorization` para una fecha dada."""

    def sign(self, date_header: str) -> str:
        """Firma `date_header` y devuelve el valor completo de la cabecera."""

        ...

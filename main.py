"""Entry point de desarrollo de manta-jobs (sin instalar el paquete).

Ejecuta la CLI (`wordcount`, `doctor`) directamente desde el checkout:
- `python main.py wordcount --wait-seconds 30`
- `python main.py doctor run`

Añade `src/` al path para que `cli`, `core` y `adapters` se importen igual
que tras `pip install -e .`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()

# projectboard/core/logging.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console lisible :
    - tous les logs projectboard
    - uvicorn (accès + erreurs) tel quel
    - SQL echo de sqlalchemy uniquement si ENV=dev l'a activé (logger sqlalchemy.engine)
    - tout autre tiers : WARNING+ seulement
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("projectboard") or name == "__main__":
            return True

        if name.startswith("uvicorn"):
            return True

        if name.startswith("sqlalchemy.engine"):
            return True

        # Warnings Python capturés dans logging.
        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    level: str | int = logging.INFO,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    Configure le logging racine :
    - handler console filtré
    - handler fichier optionnel (tout, niveau DEBUG)

    À appeler UNE fois, au lancement du serveur (pas dans les tests : pytest gère ses handlers).
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Évite les doublons si appelé deux fois.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)

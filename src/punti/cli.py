"""
@file cli.py
@brief CLI per calcolo punti da file JSON e avvio del server.
@ingroup cli_module

@details
Comandi:
- points: valida un file JSON scontrino e stampa i punti (senza server)
- serve: avvia l'API con uvicorn
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn
from pydantic import ValidationError

from punti.config import configure_logging, get_settings
from punti.domain.models import ProcessReceiptRequest
from punti.domain.points import points_breakdown
from punti.errors import InvalidReceiptError

logger = logging.getLogger("punti.cli")


def load_receipt(path: str) -> ProcessReceiptRequest:
    """
    @brief Legge e valida un file JSON scontrino.
    @param path Path al file (stesso formato di POST /receipts/process).
    @return ProcessReceiptRequest validato.

    @throws FileNotFoundError Se il file non esiste.
    @throws InvalidReceiptError Se il contenuto non è uno scontrino valido.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        return ProcessReceiptRequest.model_validate_json(text)
    except ValidationError as exc:
        raise InvalidReceiptError.from_validation_error(exc) from exc


def main(argv: list[str] | None = None) -> int:
    """
    @brief Entry point CLI.
    @param argv Argomenti (default: sys.argv).
    @return Exit code (0 ok, 2 scontrino invalido o file illeggibile).
    """
    settings = get_settings()

    p = argparse.ArgumentParser(prog="punti")
    sub = p.add_subparsers(dest="cmd", required=True)

    pts = sub.add_parser("points", help="Calcola i punti di uno scontrino JSON")
    pts.add_argument("--file", required=True, help="Path al file JSON dello scontrino")
    pts.add_argument("--explain", action="store_true", help="Stampa il contributo di ogni regola")

    serve = sub.add_parser("serve", help="Avvia l'API HTTP")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    args = p.parse_args(argv)
    configure_logging(settings)

    if args.cmd == "points":
        try:
            receipt = load_receipt(args.file)
        except InvalidReceiptError as exc:
            print(exc.message, file=sys.stderr)
            return 2
        except OSError as exc:
            print(f"Cannot read {args.file}: {exc.strerror or exc}", file=sys.stderr)
            return 2

        breakdown = points_breakdown(receipt)
        logger.debug("Scored %s: %d points", args.file, breakdown.total)
        if args.explain:
            print(breakdown.model_dump_json(indent=2, by_alias=True))
        else:
            print(json.dumps({"points": breakdown.total}))
        return 0

    if args.cmd == "serve":
        uvicorn.run(
            "punti.api.main:app",
            host=args.host,
            port=args.port,
            log_level=settings.log_level.lower(),
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Application CLI principale PaieFR."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

import paiefr
from paiefr.france.fournisseur import charger_baremes
from paiefr.france.taux import BaremeAnnuel

app = typer.Typer(
    name="pfr",
    help="PaieFR - Calcul de bulletins de paie (France)",
    no_args_is_help=True,
)

console = Console()

# Options globales stockees via le callback
_baremes_path: Path | None = None


def get_baremes_path() -> Path | None:
    """Retourne le chemin du fichier de baremes, ou None pour les baremes integres."""
    return _baremes_path


def get_tables() -> dict[int, BaremeAnnuel] | None:
    """Charge les baremes du fichier configure (None = baremes integres)."""
    chemin = get_baremes_path()
    if chemin is None:
        return None
    return charger_baremes(chemin)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"PaieFR version {paiefr.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    baremes: Optional[str] = typer.Option(
        None,
        "--baremes",
        "-b",
        help="Fichier YAML de baremes (defaut: baremes integres)",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Afficher les messages de journalisation",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Afficher la version de PaieFR",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """PaieFR - Moteur de paie: brut, cotisations, net, conges et cumuls."""
    global _baremes_path
    _baremes_path = Path(baremes) if baremes else None
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Import et enregistrement des sous-commandes
from paiefr.cli.baremes import baremes_app  # noqa: E402
from paiefr.cli.paie import app as paie_app  # noqa: E402

app.add_typer(paie_app, name="paie", help="Calcul des bulletins de paie")
app.add_typer(baremes_app, name="baremes", help="Consulter les baremes de cotisations")

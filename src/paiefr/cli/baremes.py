"""Sous-commandes CLI pour consulter les baremes de cotisations."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from paiefr.france.taux import (
    LIBELLES_CATEGORIES,
    ErreurConfiguration,
    TypeAssiette,
    obtenir_bareme,
)

baremes_app = typer.Typer(no_args_is_help=True)
console = Console()


@baremes_app.command("afficher")
def afficher(
    annee: Optional[int] = typer.Option(
        None, "--annee", "-a", help="Annee fiscale (defaut: bareme le plus recent)",
    ),
) -> None:
    """Afficher le bareme de cotisations en vigueur pour une annee."""
    from paiefr.cli.app import get_tables
    from paiefr.france.taux import TABLES

    try:
        tables = get_tables()
        publiees = tables if tables is not None else TABLES
        if not publiees:
            raise ErreurConfiguration("Aucun bareme de cotisations publie")
        bareme = obtenir_bareme(annee if annee is not None else max(publiees), tables)
    except (ErreurConfiguration, FileNotFoundError) as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    if annee is not None and bareme.annee != annee:
        console.print(
            f"[yellow]Bareme {annee} non publie, bareme {bareme.annee} applique.[/yellow]"
        )

    table = Table(
        title=f"Bareme {bareme.annee} - SMIC mensuel: {bareme.smic_mensuel} EUR",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Identifiant", style="cyan")
    table.add_column("Cotisation")
    table.add_column("Categorie")
    table.add_column("Assiette")
    table.add_column("Taux sal.", justify="right")
    table.add_column("Taux pat.", justify="right")
    table.add_column("Actif")

    for c in bareme.cotisations:
        assiette = (
            f"Plafonnee ({c.plafond})"
            if c.type_assiette is TypeAssiette.PLAFONNE
            else "Brut total"
        )
        table.add_row(
            c.identifiant,
            c.nom,
            LIBELLES_CATEGORIES[c.categorie],
            assiette,
            f"{c.taux_salarial}%",
            f"{c.taux_patronal}%",
            "oui" if c.actif else "[dim]non[/dim]",
        )
    console.print(table)

    for m in bareme.majorations:
        console.print(
            f"  {LIBELLES_CATEGORIES[m.categorie]}: au-dela de "
            f"{m.seuil(bareme.smic_mensuel)} EUR ({m.multiple_smic} x SMIC) -> "
            f"taux sal. {m.taux_salarial if m.taux_salarial is not None else 'inchange'}, "
            f"taux pat. {m.taux_patronal if m.taux_patronal is not None else 'inchange'}"
        )

"""
Commandes CLI de reconciliation du catalogue (preview, sync, apply, root-folder).
"""

from typing import Annotated, NoReturn, Optional

import typer
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from cliporg.adapters.cli.helpers import (
    cancel_on_sigint,
    console,
    suppress_loguru,
    with_container,
)
from cliporg.core.entities.reconciliation import (
    ItemStatus,
    ReconciliationPreview,
    SyncReport,
)
from cliporg.core.errors import (
    CatalogUnavailableError,
    InvalidRootError,
    RootFolderError,
)

_STATUS_STYLES = {
    ItemStatus.NEW: "green",
    ItemStatus.MISSING: "yellow",
    ItemStatus.MATCHED: "dim",
    ItemStatus.ERROR: "red",
}


RootArgument = Annotated[
    Optional[str],
    typer.Argument(help="Dossier racine (defaut: dossier racine configure)"),
]


def _fail(message: str, code: int = 1) -> NoReturn:
    console.print(f"[red]Erreur: {escape(message)}[/red]")
    raise typer.Exit(code)


def display_preview(preview: ReconciliationPreview, show_matched: bool = False) -> None:
    """Affiche le diff disque / catalogue sous forme de tableau Rich."""
    table = Table(
        title=f"Reconciliation de {escape(preview.root_folder_path)}",
        show_header=True,
    )
    table.add_column("Statut", style="bold")
    table.add_column("ID", justify="right")
    table.add_column("Chemin")
    table.add_column("Details", style="dim")

    for item in preview.items:
        if item.status == ItemStatus.MATCHED and not show_matched:
            continue
        style = _STATUS_STYLES[item.status]
        catalog_id = getattr(item, "catalog_id", None)
        details = getattr(item, "error_message", None) or getattr(item, "title", "")
        table.add_row(
            f"[{style}]{item.status.value}[/{style}]",
            str(catalog_id) if catalog_id is not None else "",
            escape(item.file_path),
            escape(details),
        )

    console.print(table)
    console.print(
        f"Fichiers scannes: {preview.total_scanned} | "
        f"[green]nouveaux: {preview.new_files_count}[/green] | "
        f"[yellow]manquants: {preview.missing_files_count}[/yellow] | "
        f"apparies: {preview.matched_files_count} | "
        f"[red]erreurs: {preview.error_count}[/red]"
    )
    for warning in preview.scan_warnings:
        console.print(
            f"[yellow]Avertissement scan: {escape(warning.path)}: {escape(warning.message)}[/yellow]"
        )


def display_report(report: SyncReport) -> None:
    """Affiche le resultat d'une synchronisation."""
    table = Table(title="Synchronisation", show_header=True)
    table.add_column("Resultat", style="bold")
    table.add_column("ID", justify="right")
    table.add_column("Chemin")
    table.add_column("Details", style="dim")

    for outcome in report.outcomes:
        if outcome.error_message:
            details = outcome.error_message
        else:
            details = "; ".join((outcome.title, *outcome.warnings)).strip("; ")
        table.add_row(
            outcome.outcome.value,
            str(outcome.catalog_id) if outcome.catalog_id is not None else "",
            escape(outcome.file_path),
            escape(details),
        )

    console.print(table)
    console.print(
        f"Fichiers scannes: {report.total_scanned} | "
        f"[green]ajoutes: {report.total_added}[/green] | "
        f"[yellow]supprimes: {report.total_removed}[/yellow] | "
        f"[red]echecs: {len(report.errors)}[/red]"
    )
    if report.cancelled:
        console.print(
            f"[yellow]Synchronisation annulee apres {report.processed_count} element(s)[/yellow]"
        )


def preview(
    root: RootArgument = None,
    show_matched: Annotated[
        bool,
        typer.Option("--all", "-a", help="Afficher aussi les fichiers apparies"),
    ] = False,
) -> None:
    """
    Compare le dossier racine au catalogue sans rien modifier.

    Exemples:
      cliporg preview                  # Dossier racine configure
      cliporg preview /media/clips     # Dossier specifique
      cliporg preview --all            # Inclut les fichiers deja catalogues
    """
    _preview(root, show_matched)


@with_container()
def _preview(container, root: Optional[str], show_matched: bool) -> None:
    try:
        root_folder = container.root_folder_service().resolve(root)
        with cancel_on_sigint() as token, suppress_loguru():
            result = container.reconciliation_service().preview(root_folder, token)
    except RootFolderError as e:
        _fail(str(e))
    except CatalogUnavailableError as e:
        _fail(str(e), code=2)
    display_preview(result, show_matched)


def sync(
    root: RootArgument = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Synchronise sans confirmation"),
    ] = False,
) -> None:
    """
    Synchronisation complete : ajoute tous les nouveaux fichiers et
    supprime tous les clips dont le fichier a disparu.

    Sans --yes, la previsualisation est affichee et une confirmation demandee.
    """
    _sync(root, yes)


@with_container()
def _sync(container, root: Optional[str], yes: bool) -> None:
    service = container.reconciliation_service()
    try:
        root_folder = container.root_folder_service().resolve(root)
        with cancel_on_sigint() as token, suppress_loguru():
            if yes:
                report = service.full_sync(root_folder, token)
            else:
                result = service.preview(root_folder, token)
                display_preview(result)
                if not result.new_files_count and not result.missing_files_count:
                    console.print("[green]Catalogue deja synchronise.[/green]")
                    return
                if not Confirm.ask("\n[bold]Appliquer la synchronisation ?[/bold]", default=False):
                    console.print("Synchronisation abandonnee.")
                    return
                report = service.apply_selection(
                    root_folder,
                    [item.file_path for item in result.new_items],
                    [item.catalog_id for item in result.missing_items],
                    token,
                )
    except RootFolderError as e:
        _fail(str(e))
    except CatalogUnavailableError as e:
        _fail(str(e), code=2)
    display_report(report)


def apply(
    root: RootArgument = None,
    add: Annotated[
        Optional[list[str]],
        typer.Option("--add", help="Chemin d'un fichier a ajouter (repetable)"),
    ] = None,
    remove: Annotated[
        Optional[list[int]],
        typer.Option("--remove", help="ID d'un clip a supprimer (repetable)"),
    ] = None,
) -> None:
    """
    Applique une selection issue d'une previsualisation.

    Exemples:
      cliporg apply --add /media/clips/a.mp4 --add /media/clips/b.mov
      cliporg apply /media/clips --remove 12 --remove 15
    """
    if not add and not remove:
        _fail("Rien a appliquer : utiliser --add et/ou --remove")
    _apply(root, add or [], remove or [])


@with_container()
def _apply(container, root: Optional[str], add: list[str], remove: list[int]) -> None:
    try:
        root_folder = container.root_folder_service().resolve(root)
        with cancel_on_sigint() as token, suppress_loguru():
            report = container.reconciliation_service().apply_selection(
                root_folder, add, remove, token
            )
    except RootFolderError as e:
        _fail(str(e))
    except CatalogUnavailableError as e:
        _fail(str(e), code=2)
    display_report(report)


def root_folder(
    path: Annotated[
        Optional[str],
        typer.Argument(help="Nouveau dossier racine par defaut (absent: affiche la valeur)"),
    ] = None,
) -> None:
    """Affiche ou modifie le dossier racine par defaut."""
    _root_folder(path)


@with_container()
def _root_folder(container, path: Optional[str]) -> None:
    service = container.root_folder_service()
    try:
        if path is None:
            current = service.get_default()
            if current:
                console.print(f"Dossier racine: {escape(current)}")
            else:
                console.print("[yellow]Aucun dossier racine configure[/yellow]")
            return
        updated = service.update(path)
    except InvalidRootError as e:
        _fail(str(e))
    except CatalogUnavailableError as e:
        _fail(str(e), code=2)
    console.print(f"[green]Dossier racine enregistre: {escape(updated)}[/green]")

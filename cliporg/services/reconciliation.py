"""
Orchestration d'une reconciliation : scan -> diff -> (apply).

Une ReconciliationSession suit la machine a etats :

    IDLE -> SCANNING -> DIFFING -> READY -> APPLYING -> COMPLETED
                                       \\-> (preview a nouveau)
    IDLE -> SCANNING -> DIFFING -> APPLYING -> COMPLETED   (synchro complete)

FAILED est atteint sur une erreur fatale (dossier racine invalide ou
catalogue injoignable) ou sur une erreur inattendue. COMPLETED est atteint
meme si des elements ont echoue. Les previsualisations ne sont jamais
conservees cote serveur : l'apply est sans etat et relance son propre scan.
"""

from enum import Enum
from typing import Optional

from loguru import logger

from cliporg.core.entities.reconciliation import (
    ReconciliationItem,
    ReconciliationPreview,
    SyncReport,
    SyncSelection,
)
from cliporg.core.errors import (
    CatalogUnavailableError,
    RootFolderError,
    SessionStateError,
)
from cliporg.core.ports.catalog import ICatalogStore
from cliporg.logging_config import session_context
from cliporg.services.cancellation import CancellationToken
from cliporg.services.reconciler import Reconciler
from cliporg.services.scanner import FileScanner, ScanRun
from cliporg.services.sync_executor import SyncExecutor


class SessionState(str, Enum):
    """Etats d'une session de reconciliation."""

    IDLE = "idle"
    SCANNING = "scanning"
    DIFFING = "diffing"
    READY = "ready"
    APPLYING = "applying"
    COMPLETED = "completed"
    FAILED = "failed"


# Transitions autorisees (hors FAILED, atteignable depuis tout etat non terminal)
_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.SCANNING}),
    SessionState.SCANNING: frozenset({SessionState.DIFFING, SessionState.APPLYING}),
    SessionState.DIFFING: frozenset({SessionState.READY, SessionState.APPLYING}),
    SessionState.READY: frozenset({SessionState.SCANNING}),
    SessionState.APPLYING: frozenset({SessionState.COMPLETED}),
    SessionState.COMPLETED: frozenset(),
    SessionState.FAILED: frozenset(),
}

TERMINAL_STATES = frozenset({SessionState.COMPLETED, SessionState.FAILED})


class ReconciliationSession:
    """
    Session de reconciliation pour un dossier racine donne.

    Le dossier racine est une valeur explicite de la session (jamais un etat
    global), ce qui permet plusieurs sessions independantes en parallele.

    Attributes:
        root_folder: Dossier racine de la session
        state: Etat courant
        history: Etats successifs (pour inspection et tests)
        last_preview: Derniere previsualisation calculee (None avant la premiere)
    """

    def __init__(
        self,
        root_folder: str,
        scanner: FileScanner,
        reconciler: Reconciler,
        catalog: ICatalogStore,
        executor: SyncExecutor,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        self.root_folder = root_folder
        self._scanner = scanner
        self._reconciler = reconciler
        self._catalog = catalog
        self._executor = executor
        self._cancel_token = cancel_token
        self.state = SessionState.IDLE
        self.history: list[SessionState] = [SessionState.IDLE]
        self.last_preview: Optional[ReconciliationPreview] = None

    # API publique

    def preview(self) -> ReconciliationPreview:
        """
        Scanne et calcule le diff, sans aucune mutation.

        Re-entrant depuis READY : le diff precedent est remplace.

        Raises:
            RootNotFoundError: dossier racine absent
            CatalogUnavailableError: catalogue injoignable
            SessionStateError: session terminee ou operation en cours
        """
        with session_context(self.root_folder):
            with self._fatal_guard():
                preview = self._scan_and_diff()
                self._transition(SessionState.READY)

            self.last_preview = preview
            logger.info(
                "Previsualisation: {new} nouveau(x), {missing} manquant(s), "
                "{matched} apparie(s), {errors} erreur(s)",
                new=preview.new_files_count,
                missing=preview.missing_files_count,
                matched=preview.matched_files_count,
                errors=preview.error_count,
            )
        return preview

    def apply(
        self, files_to_add: list[str], clip_ids_to_remove: list[int]
    ) -> SyncReport:
        """
        Applique une selection fournie par l'appelant.

        La selection provient d'une previsualisation anterieure, qui n'est
        pas conservee : le scan est relance pour verifier le dossier racine
        et compter les fichiers, puis la selection est appliquee telle quelle.

        Raises:
            RootNotFoundError: dossier racine absent
            CatalogUnavailableError: catalogue injoignable
            SessionStateError: session terminee ou operation en cours
        """
        with session_context(self.root_folder), self._fatal_guard():
            self._transition(SessionState.SCANNING)
            scan = self._scanner.scan(self.root_folder, self._cancel_token)
            total_scanned = sum(1 for _ in scan)

            self._transition(SessionState.APPLYING)
            if scan.cancelled:
                self._transition(SessionState.COMPLETED)
                return SyncReport(total_scanned=total_scanned, cancelled=True)

            selection = SyncSelection(
                root_folder=self.root_folder,
                files_to_add=list(files_to_add),
                clip_ids_to_remove=list(clip_ids_to_remove),
            )
            report = self._executor.apply(selection, self._cancel_token, total_scanned)
            self._transition(SessionState.COMPLETED)

        return report

    def full_sync(self) -> SyncReport:
        """
        Synchronisation complete : tous les NEW sont ajoutes, tous les MISSING supprimes.

        Passe directement de DIFFING a APPLYING, sans pause en READY.
        """
        with session_context(self.root_folder), self._fatal_guard():
            preview = self._scan_and_diff()
            self.last_preview = preview

            self._transition(SessionState.APPLYING)
            if preview.cancelled:
                # Diff partiel : aucune mutation
                self._transition(SessionState.COMPLETED)
                return SyncReport(total_scanned=preview.total_scanned, cancelled=True)

            selection = SyncSelection(
                root_folder=self.root_folder,
                files_to_add=[item.file_path for item in preview.new_items],
                clip_ids_to_remove=[item.catalog_id for item in preview.missing_items],
            )
            report = self._executor.apply(
                selection, self._cancel_token, preview.total_scanned
            )
            self._transition(SessionState.COMPLETED)

        return report

    # Interne

    def _scan_and_diff(self) -> ReconciliationPreview:
        self._transition(SessionState.SCANNING)
        scan: ScanRun = self._scanner.scan(self.root_folder, self._cancel_token)
        scanned_files = list(scan)
        entries = self._catalog.list_local_entries()

        self._transition(SessionState.DIFFING)
        items: list[ReconciliationItem] = self._reconciler.diff(scanned_files, entries)
        return ReconciliationPreview(
            items=items,
            total_scanned=scan.scanned_count,
            root_folder_path=self.root_folder,
            scan_warnings=list(scan.warnings),
            cancelled=scan.cancelled,
        )

    def _transition(self, target: SessionState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise SessionStateError(
                f"Invalid session transition: {self.state.value} -> {target.value}"
            )
        logger.debug(
            "Session: {source} -> {target}",
            source=self.state.value,
            target=target.value,
        )
        self.state = target
        self.history.append(target)

    def _fatal_guard(self) -> "_FatalGuard":
        if self.state in TERMINAL_STATES:
            raise SessionStateError(
                f"Session is {self.state.value}; open a new session"
            )
        return _FatalGuard(self)

    def _fail(self, error: Exception) -> None:
        logger.error("Session en echec: {error}", error=str(error))
        self.state = SessionState.FAILED
        self.history.append(SessionState.FAILED)


class _FatalGuard:
    """
    Bascule la session en FAILED sur toute erreur qui la traverse, puis la relance.

    Les erreurs attendues (dossier racine, catalogue injoignable) sont
    journalisees sans trace ; une erreur inattendue l'est avec sa trace.
    Dans les deux cas la session ne reste pas bloquee dans un etat
    intermediaire.
    """

    def __init__(self, session: ReconciliationSession) -> None:
        self._session = session

    def __enter__(self) -> None:
        return None

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is None:
            return False
        if not isinstance(exc, (RootFolderError, CatalogUnavailableError)):
            logger.opt(exception=exc).error("Erreur inattendue pendant la session")
        self._session._fail(exc)
        return False


class ReconciliationService:
    """
    Point d'entree des operations preview / apply selectif / synchro complete.

    Cree une session neuve par appel a partir des collaborateurs injectes.
    """

    def __init__(
        self,
        scanner: FileScanner,
        reconciler: Reconciler,
        catalog: ICatalogStore,
        executor: SyncExecutor,
    ) -> None:
        self._scanner = scanner
        self._reconciler = reconciler
        self._catalog = catalog
        self._executor = executor

    def open_session(
        self, root_folder: str, cancel_token: Optional[CancellationToken] = None
    ) -> ReconciliationSession:
        """Ouvre une session pour un dossier racine deja resolu."""
        return ReconciliationSession(
            root_folder=root_folder,
            scanner=self._scanner,
            reconciler=self._reconciler,
            catalog=self._catalog,
            executor=self._executor,
            cancel_token=cancel_token,
        )

    def preview(
        self, root_folder: str, cancel_token: Optional[CancellationToken] = None
    ) -> ReconciliationPreview:
        """Previsualise la reconciliation d'un dossier racine."""
        return self.open_session(root_folder, cancel_token).preview()

    def apply_selection(
        self,
        root_folder: str,
        files_to_add: list[str],
        clip_ids_to_remove: list[int],
        cancel_token: Optional[CancellationToken] = None,
    ) -> SyncReport:
        """Applique une selection issue d'une previsualisation."""
        return self.open_session(root_folder, cancel_token).apply(
            files_to_add, clip_ids_to_remove
        )

    def full_sync(
        self, root_folder: str, cancel_token: Optional[CancellationToken] = None
    ) -> SyncReport:
        """Ajoute tous les nouveaux fichiers et supprime tous les clips manquants."""
        return self.open_session(root_folder, cancel_token).full_sync()

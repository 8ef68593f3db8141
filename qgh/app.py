import logging
from functools import partial

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static
from textual.worker import Worker, WorkerState

from .github import GhClient, GhError, open_in_browser
from .models import PRCache, Repository
from .state import (
    AppState,
    ChangeDirectory,
    Command,
    Event,
    KeyPressed,
    LoadPRCache,
    LoadRepositoryPRs,
    OpenURL,
    PRCacheLoaded,
    Quit,
    RepositoryPRsLoaded,
    Resized,
    View,
    start,
    update,
)
from .views import render_detail, render_list

logger = logging.getLogger(__name__)

NAV_KEYS = ["up", "down", "pageup", "pagedown", "enter", "escape", "backspace", "ctrl+d", "ctrl+p"]


class RepoExplorerApp(App):
    """Full-screen repository picker. All state changes go through state.update."""

    ENABLE_COMMAND_PALETTE = False  # Ctrl+P toggles PR mode instead

    CSS = """
    Screen {
        background: $surface;
        overflow: hidden;
    }

    #view {
        width: 100%;
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ] + [
        Binding(key, f"nav('{key}')", show=False, priority=True) for key in NAV_KEYS
    ]

    def __init__(self, initial_state: AppState, client: GhClient) -> None:
        super().__init__()
        self.app_state = initial_state
        self.client = client
        self.pending_cd: str | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="view")

    def on_mount(self) -> None:
        state, _ = update(self.app_state, Resized(self.size.height))
        self.app_state, command = start(state)
        self.refresh_view()
        self.run_command(command)

    def on_resize(self, event: events.Resize) -> None:
        self.apply_event(Resized(event.size.height))

    def on_key(self, event: events.Key) -> None:
        if event.character and event.character.isprintable():
            event.stop()
            self.apply_event(KeyPressed(event.key, event.character))

    def action_nav(self, key: str) -> None:
        self.apply_event(KeyPressed(key))

    def action_help_quit(self) -> None:
        self.exit()

    def apply_event(self, event: Event) -> None:
        self.app_state, command = update(self.app_state, event)
        self.refresh_view()
        self.run_command(command)

    def refresh_view(self) -> None:
        if self.app_state.view is View.LIST:
            renderable = render_list(self.app_state)
        else:
            renderable = render_detail(self.app_state)
        self.query_one("#view", Static).update(renderable)

    def run_command(self, command: Command | None) -> None:
        if command is None:
            return
        if isinstance(command, LoadPRCache):
            self.run_worker(
                self._load_cache_worker, thread=True, name="_load_cache_worker", exit_on_error=False
            )
        elif isinstance(command, LoadRepositoryPRs):
            self.run_worker(
                partial(self._load_repo_prs_worker, command.repository),
                thread=True,
                name="_load_repo_prs_worker",
                description=command.repository.directory,
                exit_on_error=False,
            )
        elif isinstance(command, OpenURL):
            ok, msg = open_in_browser(command.url)
            if not ok:
                logger.debug("Could not open %s: %s", command.url, msg)
        elif isinstance(command, ChangeDirectory):
            # Written by the caller once the terminal is restored
            self.pending_cd = command.path
            self.exit()
        elif isinstance(command, Quit):
            self.exit()

    def _load_cache_worker(self) -> PRCacheLoaded:
        return PRCacheLoaded(self.client.load_pr_cache())

    def _load_repo_prs_worker(self, repo: Repository) -> RepositoryPRsLoaded:
        try:
            prs = self.client.repository_prs(repo)
        except GhError as e:
            return RepositoryPRsLoaded(repo.directory, error=str(e))
        return RepositoryPRsLoaded(repo.directory, prs=tuple(prs))

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.state == WorkerState.SUCCESS:
            self.apply_event(event.worker.result)
        elif event.state == WorkerState.ERROR:
            logger.debug("Worker %s failed: %s", event.worker.name, event.worker.error)
            # Unexpected failures degrade like a gh failure would
            if event.worker.name == "_load_cache_worker":
                self.apply_event(PRCacheLoaded(PRCache.from_pull_requests([])))
            elif event.worker.name == "_load_repo_prs_worker":
                self.apply_event(RepositoryPRsLoaded(event.worker.description, error=str(event.worker.error)))

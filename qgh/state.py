"""Application state and the reducer that drives both views.

Every key press, resize and background completion is an event. ``update``
takes the current state and one event and returns the next state together
with at most one command (load PRs, open a URL, change directory, quit) for
the app to carry out. States are frozen; nothing here touches the terminal,
git or gh.
"""
from dataclasses import dataclass, field, replace
from enum import Enum

from .config import DEFAULT_TERMINAL_HEIGHT
from .filtering import filter_repositories
from .models import PRCache, PullRequest, Repository
from .scroll import DETAIL_CHROME_LINES, LIST_CHROME_LINES, move, reveal, visible_capacity


class View(Enum):
    LIST = "list"
    DETAIL = "detail"


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class Selected:
    repository: Repository


Selection = NoSelection | Selected
NO_SELECTION = NoSelection()


@dataclass(frozen=True)
class DetailState:
    selection: Selection = NO_SELECTION
    prs: tuple[PullRequest, ...] = ()
    cursor: int = 0
    scroll_offset: int = 0
    loading: bool = False
    error: str = ""
    initial: bool = False  # opened directly at startup, not from the list

    @property
    def row_count(self) -> int:
        # Row 0 is the repository URL, PRs follow
        return 1 + len(self.prs)


@dataclass(frozen=True)
class AppState:
    repositories: tuple[Repository, ...] = ()
    filtered: tuple[Repository, ...] = ()
    search_text: str = ""
    cursor: int = 0
    scroll_offset: int = 0
    view: View = View.LIST
    detail: DetailState = field(default_factory=DetailState)
    pr_mode: bool = False
    pr_cache: PRCache = field(default_factory=PRCache)
    cache_requested: bool = False
    terminal_height: int = DEFAULT_TERMINAL_HEIGHT

    @property
    def list_capacity(self) -> int:
        return visible_capacity(self.terminal_height, LIST_CHROME_LINES)

    @property
    def detail_capacity(self) -> int:
        return visible_capacity(self.terminal_height, DETAIL_CHROME_LINES)


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class KeyPressed:
    key: str
    character: str | None = None


@dataclass(frozen=True)
class Resized:
    height: int


@dataclass(frozen=True)
class PRCacheLoaded:
    cache: PRCache


@dataclass(frozen=True)
class RepositoryPRsLoaded:
    directory: str
    prs: tuple[PullRequest, ...] = ()
    error: str = ""


Event = KeyPressed | Resized | PRCacheLoaded | RepositoryPRsLoaded


# =============================================================================
# Commands
# =============================================================================

@dataclass(frozen=True)
class LoadPRCache:
    pass


@dataclass(frozen=True)
class LoadRepositoryPRs:
    repository: Repository


@dataclass(frozen=True)
class OpenURL:
    url: str


@dataclass(frozen=True)
class ChangeDirectory:
    path: str


@dataclass(frozen=True)
class Quit:
    pass


Command = LoadPRCache | LoadRepositoryPRs | OpenURL | ChangeDirectory | Quit


# =============================================================================
# Construction
# =============================================================================

def list_state(
    repos: list[Repository],
    search_text: str = "",
    pr_mode: bool = False,
    terminal_height: int = DEFAULT_TERMINAL_HEIGHT,
) -> AppState:
    state = AppState(
        repositories=tuple(repos),
        filtered=tuple(repos),
        search_text=search_text,
        pr_mode=pr_mode,
        terminal_height=terminal_height,
    )
    return refilter(state)


def single_repo_state(
    repo: Repository, pr_mode: bool = False, terminal_height: int = DEFAULT_TERMINAL_HEIGHT
) -> AppState:
    """State for starting inside a repository that has no nested repositories."""
    return AppState(
        repositories=(repo,),
        filtered=(repo,),
        view=View.DETAIL,
        detail=DetailState(selection=Selected(repo), loading=repo.has_github, initial=True),
        pr_mode=pr_mode,
        terminal_height=terminal_height,
    )


def start(state: AppState) -> tuple[AppState, Command | None]:
    """Command to issue once the app is up."""
    detail = state.detail
    if detail.initial:
        if detail.loading and isinstance(detail.selection, Selected):
            return state, LoadRepositoryPRs(detail.selection.repository)
        return state, None
    return request_cache(state)


def request_cache(state: AppState) -> tuple[AppState, Command | None]:
    if state.pr_cache.loaded or state.cache_requested:
        return state, None
    return replace(state, cache_requested=True), LoadPRCache()


# =============================================================================
# Reducer
# =============================================================================

def refilter(state: AppState) -> AppState:
    """Re-run the filter, clamp the cursor and scroll back to the top."""
    filtered = tuple(filter_repositories(
        list(state.repositories), state.search_text, state.pr_mode, state.pr_cache
    ))
    cursor = min(max(state.cursor, 0), max(len(filtered) - 1, 0))
    return replace(state, filtered=filtered, cursor=cursor, scroll_offset=0)


def update(state: AppState, event: Event) -> tuple[AppState, Command | None]:
    if isinstance(event, KeyPressed):
        if state.view is View.LIST:
            return update_list(state, event)
        return update_detail(state, event)
    if isinstance(event, Resized):
        return resize(state, event.height), None
    if isinstance(event, PRCacheLoaded):
        return refilter(replace(state, pr_cache=event.cache, cache_requested=True)), None
    if isinstance(event, RepositoryPRsLoaded):
        return apply_repository_prs(state, event), None
    return state, None


def resize(state: AppState, height: int) -> AppState:
    state = replace(state, terminal_height=max(height, 1))
    detail = state.detail
    detail = replace(
        detail, scroll_offset=reveal(detail.cursor, detail.scroll_offset, state.detail_capacity)
    )
    return replace(
        state,
        scroll_offset=reveal(state.cursor, state.scroll_offset, state.list_capacity),
        detail=detail,
    )


def apply_repository_prs(state: AppState, event: RepositoryPRsLoaded) -> AppState:
    detail = state.detail
    selection = detail.selection
    if state.view is not View.DETAIL or not detail.loading:
        return state
    # The user may have moved on to another repository since the fetch started
    if not isinstance(selection, Selected) or selection.repository.directory != event.directory:
        return state
    if event.error:
        detail = replace(detail, loading=False, error=event.error, prs=())
    else:
        detail = replace(detail, loading=False, error="", prs=tuple(event.prs))
    return replace(state, detail=detail)


def toggle_pr_mode(state: AppState) -> tuple[AppState, Command | None]:
    state = refilter(replace(
        state,
        pr_mode=not state.pr_mode,
        search_text="",
        view=View.LIST,
        detail=DetailState(),
    ))
    if state.pr_mode:
        return request_cache(state)
    return state, None


def select_current(state: AppState) -> tuple[AppState, Command | None]:
    if not state.filtered:
        return state, None
    repo = state.filtered[state.cursor]
    if state.pr_cache.loaded or not repo.has_github:
        prs = state.pr_cache.for_repo(repo.github_url) if repo.has_github else ()
        detail = DetailState(selection=Selected(repo), prs=prs)
        return replace(state, view=View.DETAIL, detail=detail), None
    detail = DetailState(selection=Selected(repo), loading=True)
    return replace(state, view=View.DETAIL, detail=detail), LoadRepositoryPRs(repo)


def update_list(state: AppState, event: KeyPressed) -> tuple[AppState, Command | None]:
    key = event.key
    if key == "ctrl+c":
        return state, Quit()
    if key == "ctrl+d":
        if state.filtered:
            return state, ChangeDirectory(state.filtered[state.cursor].directory)
        return state, None
    if key == "ctrl+p":
        return toggle_pr_mode(state)
    if key in ("up", "down", "pageup", "pagedown"):
        capacity = state.list_capacity
        delta = {"up": -1, "down": 1, "pageup": -capacity, "pagedown": capacity}[key]
        cursor, offset = move(state.cursor, state.scroll_offset, delta, len(state.filtered), capacity)
        return replace(state, cursor=cursor, scroll_offset=offset), None
    if key == "enter":
        return select_current(state)
    if key == "escape":
        # Clear search, then leave PR mode, then quit
        if state.search_text:
            return refilter(replace(state, search_text="")), None
        if state.pr_mode:
            return refilter(replace(state, pr_mode=False)), None
        return state, Quit()
    if key == "backspace":
        if state.search_text:
            return refilter(replace(state, search_text=state.search_text[:-1])), None
        return state, None
    char = event.character
    if char and len(char) == 1 and char.isprintable():
        return refilter(replace(state, search_text=state.search_text + char)), None
    return state, None


def update_detail(state: AppState, event: KeyPressed) -> tuple[AppState, Command | None]:
    key = event.key
    detail = state.detail
    selection = detail.selection
    if key == "ctrl+c":
        return state, Quit()
    if key == "ctrl+d":
        if isinstance(selection, Selected):
            return state, ChangeDirectory(selection.repository.directory)
        return state, None
    if key == "ctrl+p":
        return toggle_pr_mode(state)
    if key == "escape":
        if detail.initial:
            if state.pr_mode:
                return refilter(replace(state, pr_mode=False)), None
            return state, Quit()
        return replace(state, view=View.LIST, detail=DetailState()), None
    if key in ("up", "down", "pageup", "pagedown"):
        capacity = state.detail_capacity
        delta = {"up": -1, "down": 1, "pageup": -capacity, "pagedown": capacity}[key]
        cursor, offset = move(detail.cursor, detail.scroll_offset, delta, detail.row_count, capacity)
        return replace(state, detail=replace(detail, cursor=cursor, scroll_offset=offset)), None
    if key == "enter" and isinstance(selection, Selected):
        repo = selection.repository
        if detail.cursor == 0:
            return state, OpenURL(repo.github_url) if repo.has_github else None
        if detail.cursor - 1 < len(detail.prs):
            return state, OpenURL(detail.prs[detail.cursor - 1].url)
    return state, None

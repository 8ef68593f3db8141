"""Rich renderables for the list view, the detail view and the plain table."""
from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import PR_TITLE_WIDTH
from .models import PullRequest, Repository
from .paths import minimal_paths
from .scroll import DETAIL_CHROME_LINES, LIST_CHROME_LINES, compute_window
from .state import AppState, Selected

HEADER_STYLE = "bold color(205)"
SEARCH_BORDER_STYLE = "color(62)"
SELECTED_STYLE = "color(230) on color(62)"
LABEL_STYLE = "bold color(14)"
GITHUB_CHECK_STYLE = "bold green"
PR_HINT_STYLE = "italic color(8)"

MORE_ABOVE = "↑ (more above)"
MORE_BELOW = "↓ (more below)"

LIST_FOOTER = (
    "Use ↑/↓ to navigate, PgUp/PgDn for pages, Enter for details, Ctrl+D to cd and exit, "
    "Ctrl+P for PR mode, Esc to clear search/quit, Ctrl+C to quit"
)
LIST_FOOTER_PR = (
    "PR Mode: Search your GitHub PRs, repos shown match PR repositories. "
    "Use ↑/↓ to navigate, PgUp/PgDn for pages, Enter for details, Ctrl+D to cd and exit, "
    "Esc to clear search/exit PR mode, Ctrl+C to quit"
)
DETAIL_FOOTER = (
    "Use ↑/↓ to navigate, PgUp/PgDn for pages, Enter to open, Ctrl+D to cd and exit, "
    "Ctrl+P for PR mode, Esc to go back, Ctrl+C to quit"
)
DETAIL_FOOTER_PR = (
    "Use ↑/↓ to navigate, PgUp/PgDn for pages, Enter to open, Ctrl+D to cd and exit, "
    "Esc to go back/exit PR mode, Ctrl+C to quit"
)


def short_pr_title(title: str, width: int = PR_TITLE_WIDTH) -> str:
    """Drop a leading "[owner/repo] " tag and truncate to width."""
    if "] " in title:
        title = title.split("] ", 1)[1]
    if len(title) > width:
        title = title[:width - 3] + "..."
    return title


def matching_prs_hint(prs: tuple[PullRequest, ...]) -> str:
    if len(prs) == 1:
        return f" → {short_pr_title(prs[0].title)}"
    return f" → {len(prs)} PRs"


def repo_row(repo: Repository, path: str, width: int, pr_mode: bool) -> Text:
    line = Text(path.ljust(width))
    if repo.has_github:
        line.append("  ")
        line.append("✓", style=GITHUB_CHECK_STYLE)
    if pr_mode and repo.matching_prs:
        line.append(matching_prs_hint(repo.matching_prs), style=PR_HINT_STYLE)
    return line


def render_list(state: AppState) -> RenderableType:
    title = "Git Repository Explorer - PR Mode" if state.pr_mode else "Git Repository Explorer"
    prompt = "PR Search" if state.pr_mode else "Search"
    lines: list[RenderableType] = [
        Text(title, style=HEADER_STYLE),
        Text(""),
        Panel(
            Text(f"{prompt}: {state.search_text}"),
            box=box.ROUNDED,
            border_style=SEARCH_BORDER_STYLE,
            padding=(0, 1),
            expand=False,
        ),
        Text(""),
    ]

    if not state.filtered:
        if state.pr_mode and not state.pr_cache.loaded:
            lines.append(Text("Loading PR cache..."))
        else:
            lines.append(Text("No repositories found matching your search."))
    else:
        paths = minimal_paths([r.directory for r in state.filtered])
        width = max(len(p) for p in paths)
        window = compute_window(
            state.terminal_height, LIST_CHROME_LINES, len(state.filtered), state.scroll_offset
        )
        # Indicator rows are always drawn so the layout does not jump
        lines.append(Text(MORE_ABOVE if window.more_above else ""))
        for i in range(window.start, window.end):
            row = repo_row(state.filtered[i], paths[i], width, state.pr_mode)
            if i == state.cursor:
                row.stylize(SELECTED_STYLE)
            lines.append(row)
        lines.append(Text(MORE_BELOW if window.more_below else ""))

    lines.append(Text(""))
    lines.append(Text(LIST_FOOTER_PR if state.pr_mode else LIST_FOOTER))
    return Group(*lines)


def render_detail(state: AppState) -> RenderableType:
    detail = state.detail
    if not isinstance(detail.selection, Selected):
        return Text("No repository selected")
    repo = detail.selection.repository

    url = Text(repo.github_url)
    if detail.cursor == 0:
        url.stylize(SELECTED_STYLE)
    lines: list[RenderableType] = [
        Text("Repository Details", style=HEADER_STYLE),
        Text(""),
        Text.assemble(("Name: ", LABEL_STYLE), repo.directory),
        Text(""),
        Text.assemble(("URL: ", LABEL_STYLE), url),
        Text(""),
        Text("Pull Requests:", style=LABEL_STYLE),
    ]

    if detail.loading:
        lines.append(Text("Loading PRs...", style="color(11)"))
    elif detail.error:
        lines.append(Text(f"Error: {detail.error}", style="color(9)"))
    elif not detail.prs:
        lines.append(Text("No open PRs by current user"))
    else:
        window = compute_window(
            state.terminal_height, DETAIL_CHROME_LINES, detail.row_count, detail.scroll_offset
        )
        if window.more_above:
            lines.append(Text(MORE_ABOVE))
        # Row 0 of the window is the URL line above while scrolled to the top
        for row in range(max(window.start, 1), window.end):
            pr = detail.prs[row - 1]
            line = Text(f"#{pr.number}: {pr.title}")
            if detail.cursor == row:
                line.stylize(SELECTED_STYLE)
            lines.append(line)
        if window.more_below:
            lines.append(Text(MORE_BELOW))

    lines.append(Text(""))
    lines.append(Text(DETAIL_FOOTER_PR if state.pr_mode else DETAIL_FOOTER))
    return Group(*lines)


def repositories_table(repos: list[Repository]) -> Table:
    """Static table printed when not attached to a terminal."""
    table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False, header_style="bold")
    table.add_column("DIRECTORY")
    table.add_column("GITHUB")
    table.add_column("PRS")
    for repo, path in zip(repos, minimal_paths([r.directory for r in repos])):
        table.add_row(
            path,
            "Yes" if repo.has_github else "No",
            str(repo.pr_count) if repo.pr_count > 0 else "",
        )
    return table

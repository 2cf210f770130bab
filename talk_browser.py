"""A terminal front-end for the Talk Catalog API.

This module is the browsing UI of the service.  It is purely
presentational: every piece of data comes from the API through
:class:`talk_catalog_client.TalkCatalogAPI`.  The pages mirror the
routes of the service:

* main menu
* register and login forms
* the top‑10 list of most viewed talks
* details of a single talk

The browser reads one environment variable:

``TALK_CATALOG_BASE_URL``
    Base URL of the API.  Defaults to ``http://localhost:8080``.

Run it with ``python talk_browser.py`` and quit with ``q`` or Ctrl+C.
"""

from __future__ import annotations

import getpass
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from talk_catalog_client import TalkCatalogAPI


logger = logging.getLogger(__name__)


def format_count(value: Optional[int]) -> str:
    """Render a large count compactly, e.g. ``72000000`` -> ``72.0M``."""
    if value is None:
        return "-"
    for threshold, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if value >= threshold:
            return f"{value / threshold:.1f}{suffix}"
    return str(value)


def format_duration(seconds: Optional[int]) -> str:
    if seconds is None:
        return "-"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def render_talk_table(talks: List[Dict[str, Any]]) -> str:
    """Render the top‑views page as a numbered plain text table."""
    if not talks:
        return "No talks available."
    lines = [f"{'#':>2}  {'ID':>6}  {'Views':>7}  Title (Speaker)"]
    for rank, talk in enumerate(talks, start=1):
        lines.append(
            f"{rank:>2}  {talk.get('talk_id', ''):>6}  {format_count(talk.get('views')):>7}  "
            f"{talk.get('title', '')} ({talk.get('speaker', '')})"
        )
    return "\n".join(lines)


def render_talk_details(talk: Dict[str, Any]) -> str:
    """Render the speaker details page for one talk."""
    rows = [
        ("Title", talk.get("title")),
        ("Speaker", talk.get("speaker")),
        ("Event", talk.get("event")),
        ("Recorded", talk.get("recorded_date")),
        ("Published", talk.get("published_date")),
        ("Duration", format_duration(talk.get("duration"))),
        ("Views", format_count(talk.get("views"))),
        ("Likes", format_count(talk.get("likes"))),
    ]
    return "\n".join(f"{label:<10} {value if value is not None else '-'}" for label, value in rows)


class TalkBrowser:
    """Interactive text UI driving a :class:`TalkCatalogAPI` client."""

    MENU = (
        ("1", "Register"),
        ("2", "Log in"),
        ("3", "Top 10 most viewed talks"),
        ("4", "Talk details"),
        ("q", "Quit"),
    )

    def __init__(
        self,
        api: Optional[TalkCatalogAPI] = None,
        *,
        input_func: Callable[[str], str] = input,
        password_func: Callable[[str], str] = getpass.getpass,
        out: TextIO = sys.stdout,
    ) -> None:
        self.api = api or TalkCatalogAPI()
        self.input = input_func
        self.password = password_func
        self.out = out
        self.username: Optional[str] = None

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def _show_error(self, error: Dict[str, Any]) -> None:
        self._print(f"Error: {error.get('message')}")

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    def show_main(self) -> None:
        self._print()
        self._print(f"Logged in as {self.username}" if self.username else "Not logged in")
        for key, label in self.MENU:
            self._print(f"  [{key}] {label}")

    def _credentials_form(self, title: str) -> tuple[str, str]:
        self._print(f"--- {title} ---")
        username = self.input("Username: ").strip()
        password = self.password("Password: ")
        return username, password

    def show_register(self) -> None:
        username, password = self._credentials_form("Register")
        account, error = self.api.register(username, password)
        if error:
            self._show_error(error)
            return
        self.username = account.get("username")
        self._print(f"Welcome, {self.username}! Your account has been created.")

    def show_login(self) -> None:
        username, password = self._credentials_form("Log in")
        account, error = self.api.login(username, password)
        if error:
            self._show_error(error)
            return
        self.username = account.get("username")
        self._print(f"Welcome back, {self.username}!")

    def show_content(self) -> None:
        talks, error = self.api.top_ten_views()
        if error:
            self._show_error(error)
            return
        self._print("--- Top 10 most viewed talks ---")
        self._print(render_talk_table(talks))
        choice = self.input("Enter a rank for details (blank to go back): ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(talks):
            self.show_speaker_details(talks[int(choice) - 1].get("talk_id"))

    def show_speaker_details(self, talk_id: Any = None) -> None:
        if talk_id is None:
            talk_id = self.input("Talk ID: ").strip()
        talk, error = self.api.get_talk(talk_id)
        if error:
            self._show_error(error)
            return
        self._print("--- Talk details ---")
        self._print(render_talk_details(talk or {}))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def handle(self, choice: str) -> bool:
        """Dispatch one menu choice.  Returns ``False`` when the user quits."""
        pages = {
            "1": self.show_register,
            "2": self.show_login,
            "3": self.show_content,
            "4": self.show_speaker_details,
        }
        choice = choice.strip().lower()
        if choice == "q":
            return False
        page = pages.get(choice)
        if page is None:
            self._print("Unknown option.")
        else:
            page()
        return True

    def run(self) -> None:
        while True:
            self.show_main()
            try:
                choice = self.input("> ")
            except EOFError:
                break
            if not self.handle(choice):
                break
        self._print("Bye!")


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
    try:
        TalkBrowser().run()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()

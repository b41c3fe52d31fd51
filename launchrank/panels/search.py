"""
Search Panel - Search entry with ranked, filtered results.

Features:
- Every keystroke is forwarded to the QueryController
- Results are the controller's visible entries in ranked order
- Matched characters are highlighted with Pango markup
- Enter launches the top hit (or runs the command in command mode)
- Arrow keys move the selection, Escape closes the launcher
"""

from gi.repository import GLib, Gdk, Gtk
from ignis import widgets

from ..controller import Activated, Outcome, QueryController, RowSelected, TextChanged


def highlight(text: str, positions) -> str:
    """Bold the characters at `positions` using Pango markup."""
    marked = set(positions)
    parts = []
    for i, char in enumerate(text):
        escaped = GLib.markup_escape_text(char)
        parts.append(f"<b>{escaped}</b>" if i in marked else escaped)
    return "".join(parts)


class SearchPanel:
    """
    Launcher window driven by a QueryController.

    The panel holds no entry state of its own; it re-reads the controller's
    snapshot after every event.
    """

    def __init__(self, controller: QueryController):
        self.controller = controller
        self.max_results = controller.config.max_results

        # Widgets (created in create_window)
        self.window = None
        self.search_entry = None
        self.results_box = None

        # Keyboard navigation
        self.selected_index = 0
        self.result_buttons = []
        self.result_ids = []

    def create_window(self):
        """
        Create the search window.

        Returns:
            widgets.Window placed by the launcher settings
        """
        config = self.controller.config

        self.search_entry = widgets.Entry(
            placeholder_text="Search applications...",
            css_classes=["search-entry"],
            on_change=lambda x: self._on_search_changed(),
            on_accept=lambda x: self._on_accept(),
        )

        self.results_box = widgets.Box(
            vertical=True,
            spacing=2,
            css_classes=["search-results"],
        )

        self._update_results()

        self.window = widgets.Window(
            namespace="launchrank",
            anchor=list(config.anchor),
            exclusivity="normal",
            kb_mode="exclusive",
            layer="overlay",
            default_width=config.width,
            default_height=config.height,
            child=widgets.Box(
                vertical=True,
                css_classes=["panel", "search-panel"],
                child=[
                    self.search_entry,
                    widgets.Scroll(
                        vexpand=True,
                        hexpand=True,
                        child=self.results_box,
                    ),
                ],
            ),
        )

        key_controller = Gtk.EventControllerKey()
        key_controller.connect("key-pressed", self._on_key_press)
        self.window.add_controller(key_controller)
        self.window.connect("notify::visible", self._on_visibility_changed)
        if config.close_on_unfocus:
            self.window.connect("notify::is-active", self._on_active_changed)

        return self.window

    def _on_search_changed(self):
        self.controller.dispatch(TextChanged(self.search_entry.text))
        self.selected_index = 0
        self._update_results()

    def _on_accept(self):
        if self.controller.command_mode or self.selected_index == 0:
            outcome = self.controller.dispatch(Activated())
        else:
            outcome = self.controller.dispatch(RowSelected(self.result_ids[self.selected_index]))
        self._close_if_done(outcome)

    def _on_row_clicked(self, entry_id: str):
        self._close_if_done(self.controller.dispatch(RowSelected(entry_id)))

    def _close_if_done(self, outcome: Outcome):
        if outcome in (Outcome.LAUNCHED, Outcome.COMMAND):
            self.window.set_visible(False)

    def _update_results(self):
        """Rebuild results list from the controller snapshot."""
        child = self.results_box.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self.results_box.remove(child)
            child = next_child

        self.result_buttons = []
        self.result_ids = []

        for entry in self.controller.visible_entries(self.max_results):
            button = self._create_result_button(entry)
            self.results_box.append(button)
            self.result_buttons.append(button)
            self.result_ids.append(entry.id)

        self._update_selection_highlight()

    def _create_result_button(self, entry):
        """Create a button with icon, highlighted name and description."""
        name_positions = entry.positions if entry.matched_field == "name" else ()

        return widgets.Button(
            css_classes=["app-item", "result-item"],
            on_click=lambda x, entry_id=entry.id: self._on_row_clicked(entry_id),
            child=widgets.Box(
                spacing=8,
                child=[
                    widgets.Icon(
                        image=entry.info.icon,
                        pixel_size=24,
                        css_classes=["app-icon"],
                    ),
                    widgets.Box(
                        vertical=True,
                        child=[
                            widgets.Label(
                                label=highlight(entry.display_name, name_positions),
                                use_markup=True,
                                css_classes=["app-name"],
                                halign="start",
                                ellipsize="end",
                                max_width_chars=40,
                            ),
                            widgets.Label(
                                label=entry.info.description,
                                css_classes=["app-description"],
                                halign="start",
                                ellipsize="end",
                                max_width_chars=50,
                            ),
                        ],
                    ),
                ],
            ),
        )

    def _on_visibility_changed(self, window, param):
        """Reset the query when the window is hidden, focus it when shown."""
        if window.get_visible():
            self.search_entry.grab_focus()
        else:
            self.search_entry.set_text("")
            self.selected_index = 0

    def _on_active_changed(self, window, param):
        """Close the launcher when it loses keyboard focus."""
        if window.get_visible() and not window.is_active():
            window.set_visible(False)

    def _on_key_press(self, controller, keyval, keycode, state):
        """Arrows for navigation, Escape to close."""
        if keyval == Gdk.KEY_Escape:
            self.window.set_visible(False)
            return True

        if not self.result_buttons:
            return False

        if keyval in (Gdk.KEY_Down, Gdk.KEY_Tab):
            if self.selected_index < len(self.result_buttons) - 1:
                self.selected_index += 1
                self._update_selection_highlight()
            return True

        if keyval == Gdk.KEY_Up:
            if self.selected_index > 0:
                self.selected_index -= 1
                self._update_selection_highlight()
            return True

        return False

    def _update_selection_highlight(self):
        for i, button in enumerate(self.result_buttons):
            if i == self.selected_index:
                button.add_css_class("keyboard-selected")
            else:
                button.remove_css_class("keyboard-selected")

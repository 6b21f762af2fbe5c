"""
Main window.

Renders AppState and forwards user actions to the controller. Runs on the
Tk main thread; nothing here touches AppState directly.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from .controller import AutoClickerController
from .state import AppState

log = logging.getLogger(__name__)


class AutoClickerWindow:
    """ttk front end for one controller."""

    def __init__(
        self,
        root: tk.Tk,
        controller: AutoClickerController,
        hotkey_sequence: Optional[str] = None,
        on_hotkey: Optional[Callable[[], None]] = None,
        on_close: Optional[Callable[[], None]] = None
    ):
        self.root = root
        self.controller = controller
        self._on_close = on_close or root.destroy
        self._syncing = False

        root.title("AutoClicker")
        root.resizable(False, False)
        root.protocol("WM_DELETE_WINDOW", self._on_close)

        self._build()

        # Return acts like pressing Start/Stop
        root.bind('<Return>', lambda event: self._on_toggle())
        if hotkey_sequence and on_hotkey:
            try:
                root.bind(hotkey_sequence, lambda event: on_hotkey())
                log.info(f"Local hotkey bound: {hotkey_sequence}")
            except tk.TclError as e:
                log.warning(f"Could not bind local hotkey {hotkey_sequence}: {e}")

        controller.state.add_listener(self._render)
        self._render(controller.state)

    def _build(self):
        main_frame = ttk.Frame(self.root, padding="12")
        main_frame.pack(fill=tk.BOTH, expand=True)

        # Profile picker
        ttk.Label(main_frame, text="Profile:").grid(row=0, column=0, sticky='w', pady=2)
        self.profile_var = tk.StringVar()
        self.profile_combo = ttk.Combobox(
            main_frame, textvariable=self.profile_var, state='readonly', width=20
        )
        self.profile_combo.grid(row=0, column=1, sticky='ew', pady=2)
        self.profile_combo.bind('<<ComboboxSelected>>', self._on_profile_selected)

        # Name editor for selected profile
        ttk.Label(main_frame, text="Name:").grid(row=1, column=0, sticky='w', pady=2)
        self.name_var = tk.StringVar()
        self.name_entry = ttk.Entry(main_frame, textvariable=self.name_var, width=22)
        self.name_entry.grid(row=1, column=1, sticky='ew', pady=2)
        self.name_var.trace_add('write', self._on_fields_edited)

        # Interval editor for selected profile
        ttk.Label(main_frame, text="Interval (s):").grid(row=2, column=0, sticky='w', pady=2)
        self.interval_var = tk.StringVar()
        self.interval_entry = ttk.Entry(main_frame, textvariable=self.interval_var, width=8)
        self.interval_entry.grid(row=2, column=1, sticky='w', pady=2)
        self.interval_var.trace_add('write', self._on_fields_edited)

        # Save & Start/Stop buttons
        buttons = ttk.Frame(main_frame)
        buttons.grid(row=3, column=0, columnspan=2, pady=(8, 4))
        self.save_btn = ttk.Button(buttons, text="Save", command=self.controller.save_profile)
        self.save_btn.pack(side=tk.LEFT, padx=10)
        self.toggle_btn = ttk.Button(buttons, text="Start", command=self._on_toggle, default='active')
        self.toggle_btn.pack(side=tk.LEFT, padx=10)

        # Status and count
        self.status_var = tk.StringVar()
        ttk.Label(main_frame, textvariable=self.status_var, font=('TkDefaultFont', 9), width=36).grid(
            row=4, column=0, columnspan=2, sticky='w'
        )
        self.count_var = tk.StringVar()
        ttk.Label(main_frame, textvariable=self.count_var, font=('TkDefaultFont', 9)).grid(
            row=5, column=0, columnspan=2, sticky='w'
        )

        main_frame.columnconfigure(1, weight=1)

    def _on_profile_selected(self, event=None):
        index = self.profile_combo.current()
        if index >= 0:
            self.controller.select_profile(index)

    def _on_fields_edited(self, *args):
        if self._syncing:
            return
        if not self.controller.edit_profile(name=self.name_var.get(), interval=self.interval_var.get()):
            # Running; put the fields back
            self._render(self.controller.state)

    def _on_toggle(self):
        self.controller.toggle()

    def _render(self, state: AppState):
        self._syncing = True
        try:
            names = [p.name for p in state.profiles]
            if tuple(self.profile_combo['values']) != tuple(names):
                self.profile_combo['values'] = names
            if self.profile_combo.current() != state.selected_index:
                self.profile_combo.current(state.selected_index)
            elif self.profile_var.get() != names[state.selected_index]:
                self.profile_var.set(names[state.selected_index])

            profile = state.selected_profile
            if self.name_var.get() != profile.name:
                self.name_var.set(profile.name)
            if self.interval_var.get() != profile.interval:
                self.interval_var.set(profile.interval)
        finally:
            self._syncing = False

        field_state = 'disabled' if state.running else 'normal'
        self.name_entry.configure(state=field_state)
        self.interval_entry.configure(state=field_state)
        self.save_btn.configure(state=field_state)
        self.toggle_btn.configure(text="Stop" if state.running else "Start")

        self.status_var.set(state.status)
        self.count_var.set(f"Clicks: {state.click_count}")

    def show(self):
        """Bring the window to the front."""
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()

    def center(self):
        """Center window on screen."""
        self.root.update_idletasks()
        width = self.root.winfo_width()
        height = self.root.winfo_height()
        x = (self.root.winfo_screenwidth() // 2) - (width // 2)
        y = (self.root.winfo_screenheight() // 2) - (height // 2)
        self.root.geometry(f'{width}x{height}+{x}+{y}')

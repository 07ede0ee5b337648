"""Tkinter rendering surface for PokemonViewModel."""
import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional
from PIL import Image, ImageOps, ImageTk
from pokeviewer.services.formatting import describe_error, display_name, record_lines
from pokeviewer.services.view_state import Failed, Loaded, Loading, PokemonViewModel

logger = logging.getLogger(__name__)

SPRITE_SIZE = (200, 200)
POLL_MS = 50
ERROR_COLOR = "#B3261E"


class PokemonWindow(ttk.Frame):
    def __init__(self, master: tk.Tk, view_model: PokemonViewModel, dispatcher=None):
        super().__init__(master, padding=16)
        self.pack(fill="both", expand=True)
        self.view_model = view_model
        self.dispatcher = dispatcher
        # Tk drops images that have no Python reference
        self._sprite_photo: Optional[ImageTk.PhotoImage] = None
        self._rendered_image_state = None

        species = display_name(view_model.species)
        master.title(f"Pokemon App - {species}")
        self._build_ui(species)

        self._unsubscribe = view_model.subscribe(lambda _vm: self.render())
        self.render()
        if dispatcher is not None:
            self._poll_dispatcher()

    def _build_ui(self, species: str):
        ttk.Label(self, text=f"{species} Data from PokeAPI", font=("Helvetica", 16, "bold")).pack(pady=(0, 16))

        # Button Counter Section
        counter = ttk.Frame(self)
        counter.pack(pady=(0, 16))
        self.count_var = tk.StringVar()
        ttk.Label(counter, textvariable=self.count_var, font=("Helvetica", 14)).pack(pady=(0, 8))
        ttk.Button(counter, text="Click Me!", width=24, command=self.view_model.increment).pack()

        # Pokemon Data Section
        self.data_frame = ttk.Frame(self)
        self.data_frame.pack(fill="x")

        self.progress = ttk.Progressbar(self.data_frame, mode="indeterminate", length=160)
        self.error_label = ttk.Label(self.data_frame, foreground=ERROR_COLOR, wraplength=360)

        self.details = ttk.Frame(self.data_frame)
        self.name_label = ttk.Label(self.details, font=("Helvetica", 18, "bold"))
        self.name_label.pack(pady=(0, 8))
        self.height_label = ttk.Label(self.details)
        self.height_label.pack()
        self.weight_label = ttk.Label(self.details)
        self.weight_label.pack(pady=(0, 8))

        self.sprite_frame = ttk.Frame(self.details, width=SPRITE_SIZE[0], height=SPRITE_SIZE[1])
        self.sprite_frame.pack_propagate(False)
        self.sprite_progress = ttk.Progressbar(self.sprite_frame, mode="indeterminate", length=80)
        self.sprite_label = ttk.Label(self.sprite_frame, anchor="center")

    def _poll_dispatcher(self):
        self.dispatcher.drain()
        self.after(POLL_MS, self._poll_dispatcher)

    def render(self):
        vm = self.view_model
        self.count_var.set(f"Button clicked {vm.click_count} times")

        state = vm.fetch_state
        for widget in (self.progress, self.error_label, self.details):
            widget.pack_forget()
        self.progress.stop()

        if isinstance(state, Loading):
            self.progress.pack(pady=8)
            self.progress.start(10)
        elif isinstance(state, Failed):
            self.error_label.configure(text=f"Error: {describe_error(state.error)}")
            self.error_label.pack(pady=8)
        elif isinstance(state, Loaded):
            name, height, weight = record_lines(state.value)
            self.name_label.configure(text=name)
            self.height_label.configure(text=height)
            self.weight_label.configure(text=weight)
            self.details.pack()
            self._render_sprite(state.value.sprite_url is not None)

    def _render_sprite(self, has_sprite: bool):
        if not has_sprite:
            self.sprite_frame.pack_forget()
            return
        self.sprite_frame.pack()

        state = self.view_model.image_state
        if state is self._rendered_image_state:
            return
        self._rendered_image_state = state

        self.sprite_progress.stop()
        self.sprite_progress.place_forget()
        self.sprite_label.place_forget()

        if isinstance(state, Loading):
            self.sprite_progress.place(relx=0.5, rely=0.5, anchor="center")
            self.sprite_progress.start(10)
        elif isinstance(state, Failed):
            self.sprite_label.configure(text="Image load failed", image="", foreground=ERROR_COLOR)
            self.sprite_label.place(relx=0.5, rely=0.5, anchor="center")
        elif isinstance(state, Loaded):
            # Scales small sprites up as well as large artwork down
            img = ImageOps.contain(state.value, SPRITE_SIZE, Image.NEAREST)
            self._sprite_photo = ImageTk.PhotoImage(img)
            self.sprite_label.configure(image=self._sprite_photo, text="")
            self.sprite_label.place(relx=0.5, rely=0.5, anchor="center")

    def destroy(self):
        self._unsubscribe()
        super().destroy()

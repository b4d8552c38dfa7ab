import customtkinter as ctk


class AlertBanner(ctk.CTkFrame):
    """A colored banner for notifications. Persistent banners have no close button."""

    def __init__(self, master, message: str, color: str = "#2196F3",
                 dismissible: bool = True, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._label = ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", justify="left", padx=10, pady=6, wraplength=1000,
        )
        self._label.grid(row=0, column=0, sticky="ew")

        if dismissible:
            ctk.CTkButton(
                self, text="✕", width=28, height=24,
                fg_color="transparent",
                hover_color="#ffffff",
                text_color="white",
                command=self.destroy,
            ).grid(row=0, column=1, padx=(0, 4))

    def set_message(self, message: str):
        self._label.configure(text=message)

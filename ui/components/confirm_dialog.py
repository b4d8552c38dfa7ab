import customtkinter as ctk

from utils.constants import LEVEL_COLORS


class ConfirmDialog(ctk.CTkToplevel):
    """Modal question shown before a destructive change to a config list.

    Blocks until closed. `.result` is True only if the confirm button was
    pressed; closing the window or Escape counts as cancel.
    """

    def __init__(self, master, title: str, message: str,
                 confirm_text: str = "Delete", detail: str = "", **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=340, justify="left",
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=0, sticky="w", padx=20, pady=(16, 4))

        if detail:
            ctk.CTkLabel(
                self, text=detail, wraplength=340, justify="left", text_color="gray60",
            ).grid(row=1, column=0, sticky="w", padx=20)

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=2, column=0, sticky="e", padx=20, pady=16)

        ctk.CTkButton(
            buttons, text="Cancel", width=90, fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"), command=self._answer_no,
        ).pack(side="left", padx=(0, 8))
        confirm = ctk.CTkButton(
            buttons, text=confirm_text, width=90,
            fg_color=LEVEL_COLORS["error"], command=self._answer_yes,
        )
        confirm.pack(side="left")

        self.bind("<Escape>", lambda _e: self._answer_no())
        self.protocol("WM_DELETE_WINDOW", self._answer_no)
        self.transient(master)
        self._place_over(master)
        self.grab_set()
        confirm.focus_set()
        self.wait_window()

    def _place_over(self, master):
        self.update_idletasks()
        top = master.winfo_toplevel()
        x = top.winfo_rootx() + (top.winfo_width() - self.winfo_width()) // 2
        y = top.winfo_rooty() + (top.winfo_height() - self.winfo_height()) // 3
        self.geometry(f"+{max(x, 0)}+{max(y, 0)}")

    def _answer_yes(self):
        self.result = True
        self.destroy()

    def _answer_no(self):
        self.result = False
        self.destroy()

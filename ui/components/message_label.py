import customtkinter as ctk

from models.message import Message
from utils.constants import LEVEL_COLORS


class MessageLabel(ctk.CTkLabel):
    """Shows the latest form/list message, colored by level."""

    def __init__(self, master, **kwargs):
        super().__init__(master, text="", anchor="w", justify="left",
                         wraplength=360, **kwargs)
        self._shown: Message | None = None

    def show(self, message: Message | None):
        if message == self._shown:
            return
        self._shown = message
        if message is None:
            self.configure(text="")
            return
        self.configure(
            text=message.text,
            text_color=LEVEL_COLORS.get(message.level, LEVEL_COLORS["error"]),
        )

import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Optional


class DialogService:
    """Native open/save/confirm/message dialogs through a hidden Tk root.

    The root is created on first use so importing the editor never opens a
    window. When Tk cannot start (no display) every dialog degrades to a
    printed message and a cancelled result.
    """

    def __init__(self):
        self.tk_root = None
        self.tk_error = None

    def _ensure_tkinter_root(self):
        if self.tk_root is not None:
            return True
        if self.tk_error is not None:
            return False
        try:
            self.tk_root = tk.Tk()
            self.tk_root.withdraw()
        except tk.TclError as e:
            print(f"ERROR: Tkinter initialization failed: {e}")
            self.tk_error = e
            return False
        return True

    def ask_open_path(self, title, extension) -> Optional[str]:
        if not self._ensure_tkinter_root():
            return None
        try:
            path = filedialog.askopenfilename(
                parent=self.tk_root,
                title=title,
                filetypes=[(f"{extension} files", f"*{extension}"), ("All files", "*.*")],
            )
        except tk.TclError as e:
            print(f"Error opening file dialog: {e}")
            return None
        return path or None

    def ask_save_path(self, title, extension) -> Optional[str]:
        if not self._ensure_tkinter_root():
            return None
        try:
            path = filedialog.asksaveasfilename(
                parent=self.tk_root,
                title=title,
                defaultextension=extension,
                filetypes=[(f"{extension} files", f"*{extension}")],
            )
        except tk.TclError as e:
            print(f"Error opening save dialog: {e}")
            return None
        return path or None

    def confirm(self, title, message) -> bool:
        if not self._ensure_tkinter_root():
            print(f"{title}: {message} (no dialog available, cancelled)")
            return False
        try:
            return bool(messagebox.askokcancel(title, message, parent=self.tk_root, default=messagebox.CANCEL))
        except tk.TclError as e:
            print(f"Error opening confirmation dialog: {e}")
            return False

    def show_error(self, title, message):
        print(f"{title}: {message}")
        if self._ensure_tkinter_root():
            try:
                messagebox.showerror(title, message, parent=self.tk_root)
            except tk.TclError as e:
                print(f"Error opening message dialog: {e}")

    def show_info(self, title, message):
        print(f"{title}: {message}")
        if self._ensure_tkinter_root():
            try:
                messagebox.showinfo(title, message, parent=self.tk_root)
            except tk.TclError as e:
                print(f"Error opening message dialog: {e}")

    def close(self):
        if self.tk_root is not None:
            self.tk_root.destroy()
            self.tk_root = None

"""Small Tk window around the operations: pick a file, show its QR code, save it,
or turn a QR PNG back into a file."""
from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Optional

from PIL import Image, ImageTk

from binqr import operations
from binqr.config import DECODED_FILE_SUFFIX, PREVIEW_SIZE, EncoderSettings
from binqr.operations import GeneratedBarcode


class BarcodeWindow:
    """
    Binds the buttons of the window to the operations module.
    The last generated barcode is kept only so the Save button can pass it on.
    """
    def __init__(self, root, settings: Optional[EncoderSettings] = None, initial_file: str = ""):
        self.root = root
        self.settings = settings or EncoderSettings()
        self.barcode: Optional[GeneratedBarcode] = None

        self.root.title("Binary to QR Code")
        self.root.minsize(500, 500)

        # File path + browse
        file_frame = tk.Frame(root)
        file_frame.pack(fill=tk.X, padx=20, pady=(20, 10))
        self.path_var = tk.StringVar(value=initial_file)
        self.path_entry = tk.Entry(file_frame, textvariable=self.path_var)
        self.path_entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        tk.Button(file_frame, text="Browse", width=10, command=self.on_browse).pack(side=tk.LEFT, padx=(10, 0))

        # Actions
        button_frame = tk.Frame(root)
        button_frame.pack(fill=tk.X, padx=20, pady=10)
        tk.Button(button_frame, text="Generate QR code", command=self.on_generate).pack(side=tk.LEFT, expand=True, fill=tk.X)
        tk.Button(button_frame, text="Decode to file", command=self.on_decode).pack(side=tk.LEFT, expand=True, fill=tk.X, padx=10)
        self.save_button = tk.Button(button_frame, text="Save image", command=self.on_save, state=tk.DISABLED)
        self.save_button.pack(side=tk.LEFT, expand=True, fill=tk.X)

        # Preview
        self.qr_label = tk.Label(root, bg="#f0f0f0", relief=tk.SOLID, borderwidth=1)
        self.qr_label.pack(padx=20, pady=(10, 20), expand=True, fill=tk.BOTH)

    def selected_path(self) -> str:
        return self.path_var.get().strip()

    def on_browse(self):
        file_name = filedialog.askopenfilename(
            title="Select file",
            filetypes=(
                ("RFA files", f"*{DECODED_FILE_SUFFIX}"),
                ("PNG images", "*.png"),
                ("All files", "*.*"),
            ),
        )
        if file_name:
            self.path_var.set(file_name)

    def on_generate(self):
        source = self.selected_path()
        if not source:
            messagebox.showwarning("Warning", "Please select a file.")
            return

        outcome = operations.generate_barcode(source, self.settings)
        if not outcome.ok:
            messagebox.showerror("Error", f"Failed to generate QR code:\n{outcome.error}")
            return

        self.barcode = outcome.value
        self.show_preview(self.barcode.image)
        self.save_button.config(state=tk.NORMAL)

    def show_preview(self, image: Image.Image):
        preview = image.copy()
        preview.thumbnail((PREVIEW_SIZE, PREVIEW_SIZE), Image.Resampling.NEAREST)
        tk_img = ImageTk.PhotoImage(preview)
        self.qr_label.config(image=tk_img)
        # Keep a reference to the image to prevent garbage collection
        self.qr_label.image = tk_img

    def on_decode(self):
        image_path = self.selected_path()
        if not image_path:
            messagebox.showwarning("Warning", "Please select a PNG image.")
            return
        if not operations.is_decodable_image(image_path):
            messagebox.showwarning("Warning", "The selected file is not a PNG image.\nPlease select a QR code PNG.")
            return

        suggested = operations.default_decoded_name(image_path)
        destination = filedialog.asksaveasfilename(
            title="Save decoded file",
            initialdir=str(suggested.parent),
            initialfile=suggested.name,
            filetypes=(("RFA files", f"*{DECODED_FILE_SUFFIX}"), ("All files", "*.*")),
        )
        if not destination:
            return

        outcome = operations.decode_to_file(image_path, destination)
        if outcome.ok:
            messagebox.showinfo("Success", f"File saved to:\n{outcome.value}")
        else:
            messagebox.showerror("Error", f"Decoding failed:\n{outcome.error}")

    def on_save(self):
        if self.barcode is None:
            return

        destination = filedialog.asksaveasfilename(
            title="Save QR code",
            initialfile=operations.default_image_name(self.barcode.source_path),
            defaultextension=".png",
            filetypes=(("PNG images", "*.png"),),
        )
        if not destination:
            return

        outcome = operations.save_barcode(self.barcode, destination)
        if outcome.ok:
            messagebox.showinfo("Saved", f"Image saved to {outcome.value}")
        else:
            messagebox.showerror("Error", f"Could not save image:\n{outcome.error}")


def run(settings: Optional[EncoderSettings] = None, initial_file: str = "") -> None:
    root = tk.Tk()
    BarcodeWindow(root, settings, initial_file)
    root.mainloop()

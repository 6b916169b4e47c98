#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductEditDialog - Dialog dodawania/edycji produktu

Tryby:
- nowy produkt: ID, Nombre, Precio, Categoría
- edycja: ID tylko do odczytu, dane odświeżane z bazy przy otwarciu

Walidację robi ProductService; dialog pokazuje komunikat pod formularzem.
"""

import customtkinter as ctk
from tkinter import messagebox
from typing import Dict, Optional
import threading

from config import messages
from products import ProductService
from products.models import Category, Product, category_choices


class ProductEditDialog(ctk.CTkToplevel):
    """
    Dialog edycji produktu.

    Używany zarówno do tworzenia nowych produktów jak i edycji istniejących.
    Po udanym zapisie `result` = True.
    """

    def __init__(
        self,
        parent,
        service: ProductService,
        categories: Dict[int, str] = None,
        product: Product = None
    ):
        """
        Args:
            parent: Okno nadrzędne
            service: Instancja ProductService
            categories: {id: nazwa} do listy kategorii
            product: Produkt do edycji (None = nowy produkt)
        """
        super().__init__(parent)

        self.service = service
        self.product = product
        self.is_edit_mode = product is not None
        self.result = None

        self._category_map: Dict[str, int] = category_choices(
            Category(cat_id, name) for cat_id, name in (categories or {}).items()
        )

        self.title(f"Editar: {product.name}" if self.is_edit_mode else "Agregar Producto")
        self.geometry("460x380")
        self.resizable(False, False)

        # Modal
        self.transient(parent)
        self.grab_set()

        self._setup_ui()

        if self.is_edit_mode:
            self._fill_form(product)
            self._reload_product()

    # =========================================================
    # UI SETUP
    # =========================================================

    def _setup_ui(self):
        """Zbuduj interfejs"""
        self.grid_columnconfigure(1, weight=1)

        row = 0

        # ID - wpisywane tylko przy tworzeniu
        row = self._create_field("ID *", row)
        self.id_entry = ctk.CTkEntry(self, width=260)
        self.id_entry.grid(row=row-1, column=1, sticky="w", padx=5, pady=6)

        row = self._create_field("Nombre *", row)
        self.name_entry = ctk.CTkEntry(self, width=260)
        self.name_entry.grid(row=row-1, column=1, sticky="w", padx=5, pady=6)

        row = self._create_field("Precio *", row)
        self.price_entry = ctk.CTkEntry(self, width=120)
        self.price_entry.grid(row=row-1, column=1, sticky="w", padx=5, pady=6)

        row = self._create_field("Categoría *", row)
        self.category_var = ctk.StringVar(value=messages.CATEGORY_PLACEHOLDER)
        self.category_combo = ctk.CTkComboBox(
            self,
            variable=self.category_var,
            values=[messages.CATEGORY_PLACEHOLDER] + list(self._category_map),
            width=260,
            state="readonly"
        )
        self.category_combo.grid(row=row-1, column=1, sticky="w", padx=5, pady=6)

        # Komunikat błędu
        self.error_label = ctk.CTkLabel(self, text="", text_color="red", wraplength=400)
        self.error_label.grid(row=row, column=0, columnspan=2, padx=20, pady=(10, 0))
        row += 1

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=row, column=0, columnspan=2, pady=20)

        self.save_btn = ctk.CTkButton(
            buttons,
            text="Guardar",
            width=120,
            fg_color="green",
            command=self._on_save
        )
        self.save_btn.pack(side="left", padx=10)

        ctk.CTkButton(
            buttons,
            text="Cancelar",
            width=120,
            fg_color="gray",
            command=self._on_cancel
        ).pack(side="left", padx=10)

    def _create_field(self, label: str, row: int) -> int:
        """Etykieta pola w pierwszej kolumnie"""
        ctk.CTkLabel(self, text=label, anchor="e", width=100).grid(
            row=row, column=0, sticky="e", padx=(20, 5), pady=6
        )
        return row + 1

    # =========================================================
    # DATA
    # =========================================================

    def _fill_form(self, product: Product):
        """Wypełnij formularz danymi produktu"""
        self.id_entry.configure(state="normal")
        self.id_entry.delete(0, "end")
        self.id_entry.insert(0, product.id)
        self.id_entry.configure(state="disabled")

        self.name_entry.delete(0, "end")
        self.name_entry.insert(0, product.name)

        self.price_entry.delete(0, "end")
        self.price_entry.insert(0, f"{product.price:g}")

        category_label = next(
            (label for label, cat_id in self._category_map.items() if cat_id == product.category_id),
            messages.CATEGORY_PLACEHOLDER
        )
        self.category_var.set(category_label)

    def _reload_product(self):
        """Pobierz aktualną wersję produktu z bazy"""
        product_id = self.product.id

        def load():
            success, result = self.service.get_product(product_id)
            self.after(0, lambda: self._on_product_reloaded(success, result))

        threading.Thread(target=load, daemon=True).start()

    def _on_product_reloaded(self, success: bool, result):
        if not self.winfo_exists():
            return

        if success:
            self.product = result
            self._fill_form(result)
        else:
            self.error_label.configure(text=result)
            self.save_btn.configure(state="disabled")

    def _collect_form_data(self) -> Dict:
        """Zbierz dane z formularza (tekst - konwersja w serwisie)"""
        category_id = self._category_map.get(self.category_var.get())

        data = {
            'name': self.name_entry.get().strip(),
            'price': self.price_entry.get().strip(),
            'category_id': "" if category_id is None else category_id,
        }
        if not self.is_edit_mode:
            data['id'] = self.id_entry.get().strip()

        return data

    # =========================================================
    # ACTIONS
    # =========================================================

    def _on_save(self):
        """Zapisz produkt"""
        data = self._collect_form_data()

        self.error_label.configure(text="")
        self.save_btn.configure(state="disabled")

        thread = threading.Thread(
            target=self._save_thread,
            args=(data,),
            daemon=True
        )
        thread.start()

    def _save_thread(self, data: Dict):
        """Wątek zapisujący produkt"""
        if self.is_edit_mode:
            success, message = self.service.update_product(self.product.id, data)
        else:
            success, result = self.service.create_product(data)
            message = messages.PRODUCT_CREATED if success else result

        self.after(0, lambda: self._on_save_done(success, message))

    def _on_save_done(self, success: bool, message: Optional[str]):
        if not self.winfo_exists():
            return

        self.save_btn.configure(state="normal")

        if not success:
            self.error_label.configure(text=message)
            return

        self.result = True
        messagebox.showinfo("Éxito", message, parent=self.master)
        self.destroy()

    def _on_cancel(self):
        """Anuluj i zamknij"""
        self.result = None
        self.destroy()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductsWindow - Główne okno katalogu produktów

Funkcjonalności:
- Lista produktów (TreeView): ID, Nombre, Precio, Categoría
- Zwijany panel filtrów (kategoria, zakres cen, sortowanie)
- Dodawanie, edycja, usuwanie produktów
- Odświeżanie listy i wylogowanie

Stan listy trzyma CatalogStore; okno tylko go renderuje.
Zapytania idą w wątkach, wyniki wracają przez after(0, ...).
"""

import customtkinter as ctk
from tkinter import ttk, messagebox, TclError
from typing import Callable, Dict, Optional
import logging
import threading

from auth.service import AuthService
from config import messages
from config.settings import (
    CTK_APPEARANCE_MODE, CTK_COLOR_THEME,
    DEFAULT_WINDOW_SIZE, TREEVIEW_ROW_HEIGHT
)
from products import create_product_service, CatalogStore, ProductService
from products.models import CatalogState, FilterConfiguration, Product
from products.gui.filter_panel import FilterPanel

logger = logging.getLogger(__name__)

EMPTY_ROW_ID = "__empty__"


class ProductsWindow(ctk.CTkToplevel):
    """
    Główne okno katalogu produktów.

    Każde okno ma własny CatalogStore - dwa otwarte okna nie
    współdzielą listy ani filtrów.
    """

    def __init__(
        self,
        parent=None,
        service: ProductService = None,
        auth_service: AuthService = None,
        on_logout: Callable[[], None] = None
    ):
        """
        Args:
            parent: Okno nadrzędne
            service: Instancja ProductService (opcjonalna - utworzy nową)
            auth_service: AuthService dla "Cerrar sesión" (opcjonalny)
            on_logout: Callback po wylogowaniu
        """
        super().__init__(parent)

        self.service = service or create_product_service()
        self.auth = auth_service
        self.on_logout = on_logout

        self.store = CatalogStore(self.service)
        self.store.subscribe(self._on_state_changed)

        self.categories: Dict[int, str] = {}
        self.selected_product: Optional[Product] = None
        self._filters_visible = False

        title = "Catálogo de Productos"
        email = self.auth.current_user_email() if self.auth else None
        if email:
            title += f" - {email}"
        self.title(title)
        self.geometry(DEFAULT_WINDOW_SIZE)
        self.minsize(800, 500)

        self._setup_ui()
        self._setup_bindings()

        self.after(100, self._initial_load)

    # =========================================================
    # UI SETUP
    # =========================================================

    def _setup_ui(self):
        """Zbuduj interfejs użytkownika"""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._create_toolbar()

        # Panel błędu (ukryty gdy brak błędu)
        self.error_label = ctk.CTkLabel(
            self,
            text="",
            text_color="white",
            fg_color="#c0392b",
            corner_radius=6,
            anchor="w"
        )

        # Panel filtrów (domyślnie zwinięty)
        self.filter_panel = FilterPanel(
            self,
            on_apply=self._on_apply_filters,
            on_error=self._show_error_banner
        )

        self._create_product_list()
        self._create_bottom_bar()

    def _create_toolbar(self):
        """Pasek narzędzi"""
        toolbar = ctk.CTkFrame(self)
        toolbar.grid(row=0, column=0, sticky="ew", padx=10, pady=10)

        ctk.CTkButton(
            toolbar,
            text="➕ Agregar Producto",
            width=150,
            fg_color="green",
            command=self._on_add_product
        ).pack(side="left", padx=5, pady=5)

        ctk.CTkButton(
            toolbar,
            text="⟳ Actualizar",
            width=110,
            command=self._refresh
        ).pack(side="left", padx=5)

        self.filters_btn = ctk.CTkButton(
            toolbar,
            text="Filtros",
            width=90,
            fg_color="gray",
            command=self._toggle_filters
        )
        self.filters_btn.pack(side="left", padx=5)

        if self.auth:
            ctk.CTkButton(
                toolbar,
                text="Cerrar sesión",
                width=120,
                fg_color="#c0392b",
                command=self._on_logout
            ).pack(side="right", padx=5)

    def _create_product_list(self):
        """Lista produktów (TreeView)"""
        list_frame = ctk.CTkFrame(self)
        list_frame.grid(row=3, column=0, sticky="nsew", padx=10, pady=(0, 10))
        list_frame.grid_rowconfigure(0, weight=1)
        list_frame.grid_columnconfigure(0, weight=1)

        style = ttk.Style()
        style.configure(
            "Products.Treeview",
            rowheight=TREEVIEW_ROW_HEIGHT,
            font=('Segoe UI', 10)
        )
        style.configure(
            "Products.Treeview.Heading",
            font=('Segoe UI', 10, 'bold')
        )

        columns = ("id", "name", "price", "category")

        self.tree = ttk.Treeview(
            list_frame,
            columns=columns,
            show="headings",
            style="Products.Treeview",
            selectmode="browse"
        )

        self.tree.column("id", width=120, anchor="w")
        self.tree.column("name", width=320, anchor="w")
        self.tree.column("price", width=100, anchor="e")
        self.tree.column("category", width=180, anchor="w")

        self.tree.heading("id", text="ID")
        self.tree.heading("name", text="Nombre")
        self.tree.heading("price", text="Precio")
        self.tree.heading("category", text="Categoría")

        vsb = ttk.Scrollbar(list_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)

        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        self.tree.bind("<<TreeviewSelect>>", self._on_product_select)
        self.tree.bind("<Double-1>", lambda e: self._on_edit_product())

    def _create_bottom_bar(self):
        """Dolny pasek: status + akcje na wybranym wierszu"""
        bottom = ctk.CTkFrame(self)
        bottom.grid(row=4, column=0, sticky="ew", padx=10, pady=(0, 10))

        self.info_label = ctk.CTkLabel(bottom, text="")
        self.info_label.pack(side="left", padx=10)

        self.delete_btn = ctk.CTkButton(
            bottom,
            text="🗑️ Eliminar",
            width=100,
            fg_color="red",
            command=self._on_delete_product,
            state="disabled"
        )
        self.delete_btn.pack(side="right", padx=5, pady=5)

        self.edit_btn = ctk.CTkButton(
            bottom,
            text="✏️ Editar",
            width=100,
            command=self._on_edit_product,
            state="disabled"
        )
        self.edit_btn.pack(side="right", padx=5)

    def _setup_bindings(self):
        """Ustaw bindingi klawiaturowe"""
        self.bind("<F5>", lambda e: self._refresh())
        self.bind("<Delete>", lambda e: self._on_delete_product())

    def _toggle_filters(self):
        """Pokaż / zwiń panel filtrów"""
        self._filters_visible = not self._filters_visible
        if self._filters_visible:
            self.filter_panel.grid(row=2, column=0, sticky="ew", padx=10, pady=(0, 10))
            self.filters_btn.configure(fg_color=("#3a7ebf", "#1f538d"))
        else:
            self.filter_panel.grid_forget()
            self.filters_btn.configure(fg_color="gray")

    # =========================================================
    # DATA LOADING
    # =========================================================

    def _initial_load(self):
        self._load_categories()
        self._load_products()

    def _load_categories(self):
        """Kategorie w tle - potrzebne do kolumny i filtrów"""
        def load():
            success, result = self.service.list_categories()
            self._safe_after(lambda: self._on_categories_loaded(success, result))

        threading.Thread(target=load, daemon=True).start()

    def _on_categories_loaded(self, success: bool, result):
        if not success:
            self._show_error_banner(result)
            return

        self.categories = {c.id: c.name for c in result}
        self.filter_panel.set_categories(result)
        self._render(self.store.state)

    def _load_products(self, filters: FilterConfiguration = None):
        """Załaduj produkty w wątku (None = ostatnie filtry)"""
        thread = threading.Thread(
            target=self.store.load,
            args=(filters,),
            daemon=True
        )
        thread.start()

    def _on_state_changed(self, state: CatalogState):
        """Listener CatalogStore - może być wołany z wątku roboczego"""
        self._safe_after(lambda: self._render(state))

    def _safe_after(self, func):
        """after(0) tylko jeśli okno jeszcze istnieje"""
        try:
            if self.winfo_exists():
                self.after(0, func)
        except (RuntimeError, TclError) as e:
            logger.debug(f"[ProductsWindow] Window gone: {e}")

    # =========================================================
    # RENDERING
    # =========================================================

    def _render(self, state: CatalogState):
        """Przerysuj listę na podstawie stanu"""
        if not self.winfo_exists():
            return

        for item in self.tree.get_children():
            self.tree.delete(item)

        if state.products:
            for product in state.products:
                self.tree.insert("", "end", iid=product.id, values=self._row_values(product))
        elif not state.loading:
            self.tree.insert("", "end", iid=EMPTY_ROW_ID, values=("", messages.EMPTY_TABLE, "", ""))

        if state.error:
            self._show_error_banner(state.error)
        else:
            self._hide_error_banner()

        if state.loading:
            self.info_label.configure(text=messages.RELOADING)
        else:
            self.info_label.configure(text=f"{len(state.products)} productos")

        self.selected_product = None
        self.edit_btn.configure(state="disabled")
        self.delete_btn.configure(state="disabled")

    def _row_values(self, product: Product) -> tuple:
        return (
            product.id,
            product.name,
            f"${int(product.price)}",
            self.categories.get(product.category_id, messages.CATEGORY_UNKNOWN),
        )

    def _show_error_banner(self, message: str):
        self.error_label.configure(text=f"  {message}")
        self.error_label.grid(row=1, column=0, sticky="ew", padx=10, pady=(0, 10))

    def _hide_error_banner(self):
        self.error_label.grid_forget()

    # =========================================================
    # EVENT HANDLERS
    # =========================================================

    def _on_apply_filters(self, filters: FilterConfiguration):
        logger.debug(f"[ProductsWindow] Apply filters: {filters}")
        self._load_products(filters)

    def _on_product_select(self, event):
        selection = self.tree.selection()
        product_id = selection[0] if selection else None

        self.selected_product = next(
            (p for p in self.store.state.products if p.id == product_id),
            None
        )

        state = "normal" if self.selected_product else "disabled"
        self.edit_btn.configure(state=state)
        self.delete_btn.configure(state=state)

    # =========================================================
    # ACTIONS
    # =========================================================

    def _on_add_product(self):
        """Dodaj nowy produkt"""
        from products.gui.product_edit_dialog import ProductEditDialog

        dialog = ProductEditDialog(self, service=self.service, categories=self.categories)
        self.wait_window(dialog)

        if dialog.result:
            self._refresh()

    def _on_edit_product(self):
        """Edytuj wybrany produkt"""
        if not self.selected_product:
            return

        from products.gui.product_edit_dialog import ProductEditDialog

        dialog = ProductEditDialog(
            self,
            service=self.service,
            categories=self.categories,
            product=self.selected_product
        )
        self.wait_window(dialog)

        if dialog.result:
            self._refresh()

    def _on_delete_product(self):
        """Usuń wybrany produkt (po potwierdzeniu)"""
        product = self.selected_product
        if not product:
            return

        if not messagebox.askyesno(
            "Eliminar producto",
            messages.CONFIRM_DELETE.format(name=product.name),
            parent=self
        ):
            return

        thread = threading.Thread(
            target=self.store.remove,
            args=(product.id,),
            daemon=True
        )
        thread.start()

    def _on_logout(self):
        """Cerrar sesión"""
        success, message = self.auth.logout()
        if not success:
            messagebox.showerror("Error", message, parent=self)
            return

        self.store.unsubscribe(self._on_state_changed)
        if self.on_logout:
            self.on_logout()

    def _refresh(self):
        """Odśwież listę z bieżącymi filtrami"""
        self._load_products()

    def destroy(self):
        self.store.unsubscribe(self._on_state_changed)
        super().destroy()


# =========================================================
# STANDALONE TEST
# =========================================================

if __name__ == "__main__":
    ctk.set_appearance_mode(CTK_APPEARANCE_MODE)
    ctk.set_default_color_theme(CTK_COLOR_THEME)

    root = ctk.CTk()
    root.withdraw()

    window = ProductsWindow(root)
    window.protocol("WM_DELETE_WINDOW", root.quit)
    root.mainloop()

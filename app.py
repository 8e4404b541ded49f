# app.py

#!/usr/bin/env python3
import os
import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from controller import ExpenseTrackerController
from expense_tracker_model import ExpenseTrackerModel, ListenerNotificationError
from summary import category_totals, export_to_excel
from transaction_filter import AmountFilter, CategoryFilter

logger = logging.getLogger(__name__)


class ExpenseTrackerView:
    """Main window. Redraws itself every time the model reports a change."""

    def __init__(self, model: ExpenseTrackerModel, controller: ExpenseTrackerController) -> None:
        self.model = model
        self.controller = controller

        self.root = tk.Tk()
        self.root.title("Gestor de Gastos")
        self.root.geometry('1000x700')
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        frame = ttk.Frame(self.root)
        frame.grid(row=0, column=0, sticky='nsew')
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(2, weight=1)

        self._build_input_controls(frame)
        self._build_filter_controls(frame)
        self._build_transactions_view(frame)

        self.model.register(self)
        self.update(self.model)

    def _build_input_controls(self, parent):
        top = ttk.Frame(parent)
        top.grid(row=0, column=0, sticky='ew', pady=5, padx=5)

        ttk.Label(top, text="Monto").grid(row=0, column=0, padx=5)
        self.amount_var = tk.StringVar()
        ttk.Entry(top, textvariable=self.amount_var, width=10).grid(row=0, column=1, padx=5)
        ttk.Label(top, text="Categoría").grid(row=0, column=2, padx=5)
        self.category_var = tk.StringVar()
        ttk.Entry(top, textvariable=self.category_var, width=15).grid(row=0, column=3, padx=5)
        ttk.Label(top, text="Comercio").grid(row=0, column=4, padx=5)
        self.store_var = tk.StringVar()
        ttk.Entry(top, textvariable=self.store_var, width=20).grid(row=0, column=5, padx=5)

        ttk.Button(top, text="Añadir Gasto",   command=self.add_transaction_ui).grid(row=0, column=6, padx=5)
        ttk.Button(top, text="Eliminar Gasto", command=self.remove_transaction_ui).grid(row=0, column=7, padx=5)
        ttk.Button(top, text="Cargar Resumen", command=self.load_statement).grid(row=0, column=8, padx=5)
        ttk.Button(top, text="Exportar Excel", command=self.export_ui).grid(row=0, column=9, padx=5)

    def _build_filter_controls(self, parent):
        f = ttk.Frame(parent)
        f.grid(row=1, column=0, sticky='ew', pady=5, padx=5)

        ttk.Label(f, text="Filtrar por").grid(row=0, column=0, padx=5)
        self.filter_kind = tk.StringVar(value='categoria')
        ttk.Combobox(f, textvariable=self.filter_kind, values=('categoria', 'monto'),
                     state='readonly', width=10).grid(row=0, column=1, padx=5)
        self.filter_value = tk.StringVar()
        ttk.Entry(f, textvariable=self.filter_value, width=15).grid(row=0, column=2, padx=5)
        ttk.Button(f, text="Aplicar Filtro", command=self.apply_filter_ui).grid(row=0, column=3, padx=5)
        ttk.Button(f, text="Quitar Filtro",  command=self.controller.clear_filter).grid(row=0, column=4, padx=5)

    def _build_transactions_view(self, parent):
        f = ttk.Frame(parent)
        f.grid(row=2, column=0, sticky='nsew', padx=5, pady=5)
        f.columnconfigure(0, weight=3); f.columnconfigure(2, weight=3)
        f.rowconfigure(0, weight=1)

        self.tree_transactions = ttk.Treeview(f, columns=("fecha","tienda","monto","categoria"), show='headings')
        for c,t in zip(("fecha","tienda","monto","categoria"),("Fecha","Tienda","Monto","Categoría")):
            self.tree_transactions.heading(c, text=t)
        self.tree_transactions.tag_configure('matched', background='light green')
        self.tree_transactions.grid(row=0, column=0, sticky='nsew')
        sb = ttk.Scrollbar(f, orient='vertical', command=self.tree_transactions.yview)
        self.tree_transactions.configure(yscroll=sb.set); sb.grid(row=0, column=1, sticky='ns')

        self.figure = plt.Figure(figsize=(6,6))
        self.ax = self.figure.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.figure, master=f)
        self.canvas.get_tk_widget().grid(row=0, column=2, sticky='nsew', padx=10)

        self.lbl_total = ttk.Label(f, text='', font=(None,16,'bold'))
        self.lbl_total.grid(row=1, column=0, columnspan=3, sticky='w', pady=5)

    # Model listener
    def update(self, model: ExpenseTrackerModel) -> None:
        for i in self.tree_transactions.get_children():
            self.tree_transactions.delete(i)
        matched = set(model.get_matched_filter_indices())
        for idx, t in enumerate(model.get_transactions()):
            self.tree_transactions.insert('', 'end', iid=str(idx), values=(
                t.date.strftime('%d/%m/%Y'), t.store_name, f"{t.amount:,.2f}", t.category
            ), tags=('matched',) if idx in matched else ())
        self.update_chart(model)

    def update_chart(self, model: ExpenseTrackerModel) -> None:
        self.ax.clear()
        sums = category_totals(model)
        if not sums.empty:
            self.ax.pie(sums.values,
                        labels=list(sums.index),
                        autopct='%1.1f%%',
                        startangle=90,
                        textprops={'fontsize':12})
            self.ax.axis('equal')
            self.ax.set_title('Gastos por Categoría', fontsize=18)
        else:
            self.ax.text(0.5,0.5,'Sin datos', ha='center', va='center')
        self.canvas.draw()
        self.lbl_total.config(text=f"Total: $ {sums.sum():,.2f}")

    # User actions
    def _run(self, action, *args):
        try:
            return action(*args)
        except ListenerNotificationError as e:
            messagebox.showerror('Error', str(e))

    def add_transaction_ui(self):
        try:
            amt = float(self.amount_var.get().replace(',','.'))
        except ValueError:
            messagebox.showerror('Error','Monto inválido')
            return
        ok = self._run(self.controller.add_transaction, amt, self.category_var.get(), self.store_var.get())
        if ok is False:
            messagebox.showerror('Error','Monto o categoría inválidos')
            return
        self.amount_var.set(''); self.store_var.set('')

    def remove_transaction_ui(self):
        sel = self.tree_transactions.selection()
        if not sel:
            messagebox.showinfo('Eliminar Gasto','Seleccione un gasto')
            return
        if not messagebox.askyesno('Confirmar','¿Eliminar este gasto?'):
            return
        self._run(self.controller.remove_transaction, int(sel[0]))

    def apply_filter_ui(self):
        value = self.filter_value.get()
        try:
            if self.filter_kind.get() == 'monto':
                transaction_filter = AmountFilter(float(value.replace(',','.')))
            else:
                transaction_filter = CategoryFilter(value)
        except ValueError as e:
            messagebox.showerror('Error', f'Filtro inválido: {e}')
            return
        self._run(self.controller.apply_filter, transaction_filter)

    def load_statement(self):
        file_path = filedialog.askopenfilename(filetypes=[('PDF files','*.pdf')])
        if not file_path: return
        try:
            count = self._run(self.controller.import_statement, file_path)
        except (RuntimeError, OSError) as e:
            messagebox.showerror('Error', f'No se pudo analizar el PDF: {e}')
            return
        if count is None:
            return
        if not count:
            messagebox.showwarning('Sin datos','No se encontraron transacciones en el PDF')
        else:
            messagebox.showinfo('Éxito', f'Se cargaron {count} transacciones')

    def export_ui(self):
        path = filedialog.asksaveasfilename(defaultextension='.xlsx', filetypes=[('Excel','*.xlsx')])
        if not path: return
        try:
            export_to_excel(self.model, path)
            messagebox.showinfo('Excel','Reporte guardado en ' + path)
        except OSError as e:
            messagebox.showerror('Error', str(e))

    def run(self):
        self.root.mainloop()


def main():
    logging.basicConfig(
        level=os.environ.get('EXPENSES_LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )
    logger.info('Starting expense tracker')
    model = ExpenseTrackerModel()
    ExpenseTrackerView(model, ExpenseTrackerController(model)).run()


if __name__ == '__main__':
    main()

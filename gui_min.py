from __future__ import annotations

import threading
from pathlib import Path
import tkinter as tk
from tkinter import filedialog, messagebox

from qrpconvert.jobcontroller.api import JobController, JobControllerError


class MinimalBatchGUI(tk.Tk):
    """
    Minimal GUI:
    - user picks one or more .qrp files
    - "Preview" shows the extracted rows of the first selected file
    - "Convert" writes one .xlsx per file into the output folder
    """

    def __init__(self) -> None:
        super().__init__()

        self.title("QRP to Excel")
        self.geometry("900x520")

        self.output_dir = str(Path(__file__).resolve().parent / "output")

        self.selected_files: list[str] = []
        self._is_running = False

        self._build_ui()

    def _build_ui(self) -> None:
        top = tk.Frame(self)
        top.pack(fill="x", padx=10, pady=10)

        btn_pick = tk.Button(top, text="Select QRP files…", command=self.on_pick_files)
        btn_pick.pack(side="left")

        btn_clear = tk.Button(top, text="Clear list", command=self.on_clear_list)
        btn_clear.pack(side="left", padx=(8, 0))

        self.btn_preview = tk.Button(top, text="Preview", command=self.on_preview)
        self.btn_preview.pack(side="left", padx=(8, 0))

        self.btn_run = tk.Button(top, text="Convert", command=self.on_run)
        self.btn_run.pack(side="left", padx=(8, 0))

        self.lbl_status = tk.Label(top, text="Ready.")
        self.lbl_status.pack(side="right")

        middle = tk.Frame(self)
        middle.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        left = tk.Frame(middle)
        left.pack(side="left", fill="both", expand=True)

        tk.Label(left, text="Selected files:").pack(anchor="w")

        self.listbox = tk.Listbox(left, height=12)
        self.listbox.pack(fill="both", expand=True)

        right = tk.Frame(middle)
        right.pack(side="left", fill="both", expand=True, padx=(10, 0))

        tk.Label(right, text="Log:").pack(anchor="w")

        self.txt_log = tk.Text(right, height=12, wrap="none")
        self.txt_log.pack(fill="both", expand=True)

        footer = tk.Frame(self)
        footer.pack(fill="x", padx=10, pady=(0, 10))

        tk.Label(footer, text="output:").pack(side="left")
        self.ent_output = tk.Entry(footer)
        self.ent_output.pack(side="left", fill="x", expand=True, padx=(6, 6))
        self.ent_output.insert(0, self.output_dir)

        btn_set_output = tk.Button(footer, text="Choose folder…", command=self.on_pick_output)
        btn_set_output.pack(side="left")

    def on_pick_output(self) -> None:
        if self._is_running:
            return

        d = filedialog.askdirectory(title="Choose output folder")
        if not d:
            return

        self.output_dir = d
        self.ent_output.delete(0, tk.END)
        self.ent_output.insert(0, self.output_dir)
        self._log(f"output set: {self.output_dir}")

    def on_pick_files(self) -> None:
        if self._is_running:
            return

        files = filedialog.askopenfilenames(
            title="Select QRP files",
            filetypes=[("QRP reports", "*.qrp *.QRP"), ("All files", "*.*")],
        )
        if not files:
            return

        for f in files:
            if f not in self.selected_files:
                self.selected_files.append(f)

        self._refresh_listbox()
        self._log(f"{len(files)} file(s) added. Total: {len(self.selected_files)}")

    def on_clear_list(self) -> None:
        if self._is_running:
            return

        self.selected_files = []
        self._refresh_listbox()
        self._log("List cleared.")

    def on_preview(self) -> None:
        if self._is_running:
            return
        if not self.selected_files:
            messagebox.showinfo("Info", "Select QRP files first.")
            return

        selection = self.listbox.curselection()
        path = self.selected_files[selection[0]] if selection else self.selected_files[0]
        self._start(lambda: self._run_preview(path))

    def on_run(self) -> None:
        if self._is_running:
            return

        out = self.ent_output.get().strip()
        if not out:
            messagebox.showerror("Error", "Output folder is empty.")
            return

        if not self.selected_files:
            messagebox.showinfo("Info", "Select QRP files first.")
            return

        self.output_dir = out
        self._start(self._run_batch)

    def _start(self, target) -> None:
        # worker thread keeps the GUI responsive
        self._is_running = True
        self.btn_run.config(state="disabled")
        self.btn_preview.config(state="disabled")
        self.lbl_status.config(text="Running…")

        t = threading.Thread(target=target, daemon=True)
        t.start()

    def _run_preview(self, path: str) -> None:
        self._log(f"=== Preview: {path} ===")
        try:
            res = JobController().preview(path)
            for row in res.rows:
                self._log(" | ".join(row))
            if res.truncated:
                self._log(f"... showing first {len(res.rows)} of {res.total_rows} rows")
            else:
                self._log(f"({res.total_rows} rows)")
        except JobControllerError as e:
            self._log(f"  -> ERROR: {e}")
        finally:
            self._log("")
            self._finish()

    def _run_batch(self) -> None:
        jc = JobController()

        total = len(self.selected_files)
        done = 0

        self._log("=== Conversion started ===")
        self._log(f"output: {self.output_dir}")
        self._log(f"files: {total}\n")

        for path in self.selected_files:
            done += 1
            self._set_status(f"{done}/{total} …")

            self._log(f"[{done}/{total}] {path}")
            result = jc.convert(path, self.output_dir)
            self._log(f"  -> status={result.status}, job_id={result.job_id}")
            if "error" in result.details:
                self._log(f"     error={result.details.get('error')}")
            if "excel_path" in result.details:
                self._log(f"     {result.details.get('excel_path')} | rows={result.details.get('rows')}")

            self._log("")

        self._log("=== Conversion finished ===")
        self._finish()

    def _finish(self) -> None:
        self._is_running = False
        self._set_status("Done.")
        self._enable_buttons()

    def _refresh_listbox(self) -> None:
        self.listbox.delete(0, tk.END)
        for f in self.selected_files:
            self.listbox.insert(tk.END, f)

    def _log(self, msg: str) -> None:
        def _append() -> None:
            self.txt_log.insert(tk.END, msg + "\n")
            self.txt_log.see(tk.END)

        self.after(0, _append)

    def _set_status(self, msg: str) -> None:
        self.after(0, lambda: self.lbl_status.config(text=msg))

    def _enable_buttons(self) -> None:
        def _enable() -> None:
            self.btn_run.config(state="normal")
            self.btn_preview.config(state="normal")

        self.after(0, _enable)


if __name__ == "__main__":
    app = MinimalBatchGUI()
    app.mainloop()

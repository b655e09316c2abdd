# helpers/logger.py
import csv, json, datetime, pathlib
import matplotlib.pyplot as plt


class RunLogger:
    def __init__(self, root="runs", tag="run"):
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        self.root = pathlib.Path(root)
        self.dir = self.root / f"{tag}_{ts}"
        self.dir.mkdir(parents=True, exist_ok=True)
        self.csv_path = self.dir / "history.csv"
        self.json_path = self.dir / "history.json"
        self.records = []  # list of dicts per gradient check
        self._csv_header_written = False

    # ---------- logging ----------
    def log_check(self, step, **errors):
        row = {"step": int(step), **{k: float(v) for k, v in errors.items()}}
        self.records.append(row)
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(row.keys()))
            if not self._csv_header_written:
                writer.writeheader()
                self._csv_header_written = True
            writer.writerow(row)

    def save_json(self):
        with open(self.json_path, "w") as f:
            json.dump(self.records, f, indent=2)
        return str(self.json_path)

    # ---------- plotting ----------
    def _plots_dir(self, subdir):
        out = self.dir / subdir
        out.mkdir(parents=True, exist_ok=True)
        return out

    def plot_errors(self, tag="run", subdir="plots"):
        """
        Saves relative error per gradient as grad_errors_<tag>.png.
        Returns the path, or None when nothing has been logged.
        """
        if len(self.records) == 0:
            return None
        keys = [k for k in self.records[0] if k != "step"]
        steps = [r["step"] for r in self.records]

        outdir = self._plots_dir(subdir)
        plt.figure()
        for k in keys:
            # log scale cannot show exact zeros
            plt.plot(steps, [max(r.get(k, 0.0), 1e-20) for r in self.records], marker="o", label=k)
        plt.yscale("log")
        plt.xlabel("Check")
        plt.ylabel("Relative error")
        plt.title(f"Gradient check ({tag})")
        plt.legend()
        plt.tight_layout()
        path = outdir / f"grad_errors_{tag}.png"
        plt.savefig(path, dpi=160)
        plt.close()
        return str(path)

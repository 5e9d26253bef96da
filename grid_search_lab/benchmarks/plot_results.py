# grid_search_lab/benchmarks/plot_results.py
from __future__ import annotations
import io
import json
import math
from pathlib import Path
from typing import List

import matplotlib.pyplot as plt

HERE = Path(__file__).parent
RESULTS_JSON = HERE / "results.json"
OUT_DIR = HERE

def load_rows(path: Path = RESULTS_JSON) -> List[dict]:
    if not path.exists():
        raise SystemExit(f"Missing {path}. Run: python -m grid_search_lab.benchmarks.run_all")
    rows = json.loads(path.read_text()).get("results", [])
    # Keep only runs that reached the goal
    rows = [r for r in rows if r.get("success")]
    if not rows:
        raise SystemExit("No successful rows to plot.")
    return rows

def _sorted(rows, key):
    return sorted(rows, key=lambda r: math.inf if r.get(key) is None else r[key])

def _label(v) -> str:
    if v is None:
        return "n/a"
    if isinstance(v, float):
        return f"{v:.4f}" if v < 0.01 else f"{v:.3f}"
    return f"{v}"

def bar_chart(rows, metric: str, title: str, ylabel: str):
    """One bar per algorithm; rows missing the metric are drawn as n/a at zero."""
    rows = _sorted(rows, metric)
    algos = [r["algo"] for r in rows]
    vals = [r.get(metric) for r in rows]
    heights = [0 if v is None else v for v in vals]
    top = max(heights) or 1

    fig, ax = plt.subplots(figsize=(6, 4))
    x = list(range(len(algos)))
    ax.bar(x, heights)
    ax.set_title(title)
    ax.set_ylabel(ylabel)
    ax.set_xticks(x)
    ax.set_xticklabels(algos, rotation=20, ha="right")
    for xi, v, hgt in zip(x, vals, heights):
        ax.text(xi, hgt + 0.01 * top, _label(v), ha="center", va="bottom", fontsize=8)
    fig.tight_layout()
    return fig

def format_table(rows) -> str:
    lines = [
        "| Algorithm | Cost | Nodes Expanded | Time (s) | Peak KB |",
        "|---|---:|---:|---:|---:|",
    ]
    def fnum(x):
        if isinstance(x, float):
            return f"{x:.6f}"
        if isinstance(x, int):
            return f"{x}"
        return "n/a"
    for r in rows:
        lines.append(
            f"| {r['algo']} | {fnum(r.get('cost'))} | {fnum(r.get('nodes_expanded'))} | "
            f"{fnum(r.get('time_s'))} | {fnum(r.get('peak_kb'))} |"
        )
    return "\n".join(lines)

def fig_to_png_bytes(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=160)
    plt.close(fig)
    return buf.getvalue()

CHARTS = (
    ("nodes_expanded", "Nodes Expanded (lower is better)", "nodes", "nodes_expanded.png"),
    ("time_s", "Wall Time (lower is better)", "seconds", "time.png"),
    ("cost", "Path Cost (lower is better)", "cost", "cost.png"),
)

def main(results: Path = RESULTS_JSON, out_dir: Path = OUT_DIR):
    rows = load_rows(results)

    md_path = out_dir / "results.md"
    md_path.write_text(format_table(rows))
    print(f"Wrote {md_path}")

    for metric, title, ylabel, fname in CHARTS:
        (out_dir / fname).write_bytes(fig_to_png_bytes(bar_chart(rows, metric, title, ylabel)))
        print(f"Wrote {out_dir / fname}")

if __name__ == "__main__":
    main()

"""Plot utilities for persisted generation scores."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from data.logger import GenerationLogger  # noqa: E402


def plot_run(db_path: str | Path, run_id: str, output_path: str | Path) -> Path:
    """Render min/avg/max score curves for a run from SQLite logs."""
    logger = GenerationLogger(db_path)
    try:
        rows = logger.fetch_generations(run_id)
    finally:
        logger.close()
    if not rows:
        raise ValueError(f"No generations logged for run '{run_id}'")

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    generations = [int(row["generation_number"]) for row in rows]
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(generations, [float(row["avg_score"]) for row in rows], label="avg_score")
    if all(row["min_score"] is not None for row in rows):
        ax.plot(generations, [float(row["min_score"]) for row in rows], label="min_score", alpha=0.6)
    if all(row["max_score"] is not None for row in rows):
        ax.plot(generations, [float(row["max_score"]) for row in rows], label="max_score", alpha=0.6)
    ax.set_xlabel("generation")
    ax.set_ylabel("score")
    ax.legend()

    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
    return output

"""SQLite-backed run metadata and per-generation score logging."""

from __future__ import annotations

import hashlib
import json
import platform
import sqlite3
import time
from pathlib import Path
from typing import Any, Mapping

from core.render_state import GenerationStats


class GenerationLogger:
    """Persist run metadata and per-generation scores in SQLite."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row
        self._ensure_schema()

    def close(self) -> None:
        self.connection.close()

    def _ensure_schema(self) -> None:
        self.connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS run_metadata (
                run_id TEXT PRIMARY KEY,
                config_hash TEXT NOT NULL,
                seed INTEGER,
                config_json TEXT NOT NULL,
                runtime_metadata TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS generation_scores (
                run_id TEXT NOT NULL,
                generation_number INTEGER NOT NULL,
                avg_score REAL NOT NULL,
                min_score REAL,
                max_score REAL,
                PRIMARY KEY (run_id, generation_number),
                FOREIGN KEY (run_id)
                    REFERENCES run_metadata (run_id)
                    ON DELETE CASCADE
            );
            """
        )
        self.connection.commit()

    def start_run(self, config: Mapping[str, Any], seed: int | None = None) -> str:
        config_json = json.dumps(dict(config), sort_keys=True)
        config_hash = hashlib.sha256(config_json.encode("utf-8")).hexdigest()
        runtime_metadata = {"python_version": platform.python_version(), "platform": platform.platform()}
        run_nonce = str(time.time_ns())
        run_id = hashlib.sha256(f"{config_hash}:{seed}:{run_nonce}".encode("utf-8")).hexdigest()[:16]

        self.connection.execute(
            """
            INSERT OR IGNORE INTO run_metadata (
                run_id, config_hash, seed, config_json, runtime_metadata
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (run_id, config_hash, seed, config_json, json.dumps(runtime_metadata, sort_keys=True)),
        )
        self.connection.commit()
        return run_id

    def log_generation(self, run_id: str, generation_number: int, stats: GenerationStats) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO generation_scores (
                run_id,
                generation_number,
                avg_score,
                min_score,
                max_score
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (run_id, int(generation_number), float(stats.avg_score), stats.min_score, stats.max_score),
        )
        self.connection.commit()

    def fetch_generations(self, run_id: str) -> list[dict[str, Any]]:
        """Return ordered generation scores for plotting/analysis."""
        rows = self.connection.execute(
            """
            SELECT generation_number, avg_score, min_score, max_score
            FROM generation_scores
            WHERE run_id = ?
            ORDER BY generation_number ASC
            """,
            (run_id,),
        ).fetchall()
        return [dict(row) for row in rows]

    def latest_run_id(self) -> str | None:
        """Return most recently created run id, if any."""
        row = self.connection.execute(
            """
            SELECT run_id
            FROM run_metadata
            ORDER BY created_at DESC, rowid DESC
            LIMIT 1
            """
        ).fetchone()
        return str(row[0]) if row is not None else None

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from dotenv import load_dotenv


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ImportConfig:
    """
    Configuration container for an import run.

    This dataclass defines the tunable parameters for reading sources,
    naming the structural cursor columns, and reporting progress.
    """

    # text sources
    delimiter: str = ","
    encoding: str = "utf-8-sig"

    # cursor sources
    node_id_column: str = "id"
    rel_columns: Tuple[str, str, str] = ("src", "dest", "type")

    # logging
    progress_every: int = 100_000
    verbose: bool = True

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "ImportConfig":
        """
        Build a config from environment variables (and a `.env` file).

        Recognized variables: PG_IMPORT_DELIMITER, PG_IMPORT_ENCODING,
        PG_IMPORT_PROGRESS_EVERY, PG_IMPORT_VERBOSE. Keyword overrides
        win over the environment; `None` overrides are ignored.

        Args:
            dotenv_path (Optional[str]): Explicit `.env` file to load.
            **overrides: Field values taking precedence.

        Returns:
            ImportConfig: Resolved configuration.
        """
        load_dotenv(dotenv_path)
        config = cls()

        env = {}
        if os.getenv("PG_IMPORT_DELIMITER"):
            env["delimiter"] = os.environ["PG_IMPORT_DELIMITER"]
        if os.getenv("PG_IMPORT_ENCODING"):
            env["encoding"] = os.environ["PG_IMPORT_ENCODING"]
        if os.getenv("PG_IMPORT_PROGRESS_EVERY"):
            env["progress_every"] = int(os.environ["PG_IMPORT_PROGRESS_EVERY"])
        if os.getenv("PG_IMPORT_VERBOSE"):
            env["verbose"] = _env_bool(os.environ["PG_IMPORT_VERBOSE"])

        env.update({k: v for k, v in overrides.items() if v is not None})
        return replace(config, **env)

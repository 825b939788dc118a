"""Module entrypoint for ``python -m topo_strict``."""

from __future__ import annotations

from topo_strict.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())

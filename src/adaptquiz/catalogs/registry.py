"""Catalog discovery and registry."""

from __future__ import annotations

import logging
from pathlib import Path

from adaptquiz.engine.question_bank import CatalogMeta, QuestionBank, load_catalog, load_question_bank

logger = logging.getLogger(__name__)


class CatalogRegistry:
    """Discovers question catalogs in the catalogs directory.

    Catalogs are addressed by the ``id`` in their catalog.yaml, which need
    not match the folder they live in.
    """

    def __init__(self, catalogs_dir: Path | None = None):
        self.catalogs_dir = catalogs_dir or (
            Path(__file__).parent
        )

    def _discover(self) -> dict[str, tuple[CatalogMeta, Path]]:
        found: dict[str, tuple[CatalogMeta, Path]] = {}
        for path in sorted(self.catalogs_dir.iterdir()):
            if not (path.is_dir() and (path / "catalog.yaml").exists()):
                continue
            try:
                meta = load_catalog(path)
            except (OSError, ValueError) as e:
                logger.warning("skipping catalog %s: %s", path.name, e)
                continue
            if meta.id in found:
                logger.warning(
                    "skipping catalog %s: id %r already used by %s",
                    path.name, meta.id, found[meta.id][1].name,
                )
                continue
            found[meta.id] = (meta, path)
        return found

    def list_catalogs(self) -> list[CatalogMeta]:
        """Discover all catalogs with a catalog.yaml."""
        return [meta for meta, _ in self._discover().values()]

    def get_catalog(self, catalog_id: str) -> CatalogMeta | None:
        entry = self._discover().get(catalog_id)
        return entry[0] if entry else None

    def catalog_dir(self, catalog_id: str) -> Path:
        entry = self._discover().get(catalog_id)
        if entry is None:
            raise ValueError(f"Unknown catalog: {catalog_id}")
        return entry[1]

    def load_bank(self, catalog_id: str) -> QuestionBank:
        return load_question_bank(self.catalog_dir(catalog_id))

from pathlib import Path

from catalog.models import FileInput


def stored_blobs(location) -> list:
    """Names of the payloads currently in a storage directory."""
    root = Path(location)
    if not root.exists():
        return []
    return sorted(p.name for p in root.iterdir())


def make_file_input(**overrides) -> FileInput:
    fields = {
        "filename": "0f1e2d3c4b5a69788796a5b4c3d2e1f0",
        "original_name": "graph.json",
        "mimetype": "application/json",
        "size": "42",
        "category": "scene-graphs",
        "section": "dataset",
        "file_type": "json",
        "metadata": None,
    }
    fields.update(overrides)
    return FileInput(**fields)

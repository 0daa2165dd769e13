"""Browser UI served at ``GET /``."""

from importlib.resources import files


def load_index_html() -> str:
    """Return the single-page chat UI bundled with the package."""
    return files(__name__).joinpath("static").joinpath("index.html").read_text(encoding="utf-8")

"""Top-level package for the document template toolkit.

Provides subpackages:
- docgen_toolkit.core – template, page and element models plus (de)serialization
- docgen_toolkit.binding – dotted-path data binding resolution
- docgen_toolkit.layout – height estimation and row repositioning
- docgen_toolkit.output – visual tree rendering, HTML and PDF writers
- docgen_toolkit.storage – template persistence interface
"""

DIST_NAME = "docgen-toolkit"


def _get_version() -> str:
    """Installed distribution version, else the checkout's pyproject.toml."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        pass

    from pathlib import Path

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        lines = pyproject.read_text(encoding="utf-8").splitlines()
    except OSError:
        return "0.0.0"
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == "version":
            return value.strip().strip('"').strip("'")
    return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]

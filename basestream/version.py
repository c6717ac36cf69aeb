"""Version resolution for package metadata and runtime engine version."""

try:
    from importlib.metadata import PackageNotFoundError as _PackageNotFoundError
    from importlib.metadata import version as _package_version
except Exception:  # pragma: no cover
    _PackageNotFoundError = Exception
    _package_version = None


ENGINE_VERSION = "1.0.0"

if _package_version is not None:
    try:
        __version__ = _package_version("basestream")
    except _PackageNotFoundError:
        __version__ = ENGINE_VERSION
else:
    __version__ = ENGINE_VERSION


__all__ = ["ENGINE_VERSION", "__version__"]

from importlib.metadata import PackageNotFoundError, version

try:
    QUINE_VERSION = version("quine")
except PackageNotFoundError:
    # source tree used without `pip install -e .`
    QUINE_VERSION = "0+unknown"

__all__ = ["QUINE_VERSION"]

"""Allow ``python -m osm_svg``."""

from .cli import app

if __name__ == "__main__":
    app()

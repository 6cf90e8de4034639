"""Allow `python -m pipeline_demo ...`."""

from pipeline_demo.cli import app

if __name__ == "__main__":
    app()

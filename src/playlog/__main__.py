"""Allow ``python -m playlog``."""

from playlog.main import run

if __name__ == "__main__":
    run()

"""Allow ``python -m kss``."""

from kss.main import run

if __name__ == "__main__":
    run()

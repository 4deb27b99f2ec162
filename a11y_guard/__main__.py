"""Allow ``python -m a11y_guard``."""

from .cli.main import main

if __name__ == "__main__":
    main()

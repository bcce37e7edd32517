"""Allow running the CLI with ``python -m thumbforge``."""

from thumbforge.cli import main

if __name__ == "__main__":
    main()

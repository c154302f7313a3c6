"""Package entry point for ``python -m sentence_model``.

Delegates to the CLI's main() function.
"""

from sentence_model.cli import main

if __name__ == "__main__":
    main()

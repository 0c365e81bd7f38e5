"""Package entry point for ``python -m titlovi``.

Delegates to the CLI's main().
"""

from titlovi.cli import main

if __name__ == "__main__":
    main()

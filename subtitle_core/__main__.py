"""Package entry point for ``python -m subtitle_core``.

Delegates to the CLI's main() function.
"""

from subtitle_core.cli import main

if __name__ == "__main__":
    main()

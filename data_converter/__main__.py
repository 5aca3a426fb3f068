"""Package entry point for ``python -m data_converter``.

WHY: Users run the converter as ``python -m data_converter convert
data.json -o data.yaml``. Python's ``-m`` flag looks for
``__main__.py`` inside the package and executes it.

HOW: Delegates to the CLI's main() function.
"""

from data_converter.cli import main

if __name__ == "__main__":
    main()

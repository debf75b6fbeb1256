# patient_resolver/__main__.py

"""Entry point for executing patient_resolver as a module.

This file allows the patient_resolver package to be executed as a script
using `python -m patient_resolver`.
"""

from .main import main

if __name__ == "__main__":
    main()

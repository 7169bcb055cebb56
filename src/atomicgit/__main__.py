"""Allow ``python -m atomicgit``."""
from atomicgit.cli import main

if __name__ == "__main__":
    main()

from __future__ import annotations

from todolist.cli import main

if __name__ == "__main__":
    main()

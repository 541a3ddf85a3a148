"""Allow running sysdash with ``python -m sysdash``."""

from sysdash.app import main

raise SystemExit(main())

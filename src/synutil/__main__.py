"""Allow ``python -m synutil``."""

from synutil.cli import main

raise SystemExit(main())

from src.filters.cli import main

raise SystemExit(main())

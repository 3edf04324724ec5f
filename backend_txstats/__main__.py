from backend_txstats.cli import main

raise SystemExit(main())

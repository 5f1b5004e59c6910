from ed_engine.cli import main

raise SystemExit(main())
